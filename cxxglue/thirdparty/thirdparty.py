from abc import ABC, abstractmethod


class ThirdParty(ABC):
    """An external tool cxxglue shells out to."""

    @staticmethod
    @abstractmethod
    def check_requirements() -> list[str]:
        """Return the names of missing executables."""
