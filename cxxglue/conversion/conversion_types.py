from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .rust_types import TypeRef


class ContractViolation(ValueError):
    """The analysis phase handed us an inconsistent description.

    ``field`` names the offending input so the caller can find the
    producer of the bad value.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class CppConversionType(Enum):
    NONE = auto()
    FROM_UNIQUE_PTR_TO_VALUE = auto()
    FROM_PTR_TO_VALUE = auto()
    FROM_PTR_TO_MOVE = auto()
    FROM_VALUE_TO_UNIQUE_PTR = auto()


class RustConversionType(Enum):
    NONE = auto()
    FROM_STR = auto()
    TO_BOXED_UP_HOLDER = auto()
    FROM_PIN_MAYBE_UNINIT_TO_PTR = auto()
    FROM_PIN_MOVE_REF_TO_PTR = auto()
    FROM_TYPE_TO_PTR = auto()
    FROM_VALUE_PARAM_TO_PTR = auto()

    @property
    def requires_pointer(self) -> bool:
        return self in _POINTER_DERIVING


_POINTER_DERIVING = frozenset({
    RustConversionType.FROM_PIN_MAYBE_UNINIT_TO_PTR,
    RustConversionType.FROM_PIN_MOVE_REF_TO_PTR,
    RustConversionType.FROM_TYPE_TO_PTR,
})


@dataclass(frozen=True)
class SubclassName:
    """A Rust subclass of a C++ class, e.g. ``MyObserver``."""

    name: str

    def id(self) -> str:
        return self.name

    def holder(self) -> str:
        return f"{self.name}Holder"


@dataclass(frozen=True)
class TypeConversionPolicy:
    unwrapped_type: TypeRef
    cpp_conversion: CppConversionType = CppConversionType.NONE
    rust_conversion: RustConversionType = RustConversionType.NONE
    subclass: Optional[SubclassName] = None

    def __post_init__(self) -> None:
        if self.rust_conversion is RustConversionType.TO_BOXED_UP_HOLDER and self.subclass is None:
            raise ContractViolation("subclass", "boxed holder conversion needs a subclass name")

    @classmethod
    def new_unconverted(cls, ty: TypeRef) -> "TypeConversionPolicy":
        return cls(ty)

    @classmethod
    def new_to_unique_ptr(cls, ty: TypeRef) -> "TypeConversionPolicy":
        return cls(ty, cpp_conversion=CppConversionType.FROM_VALUE_TO_UNIQUE_PTR)

    @classmethod
    def new_from_str(cls, ty: TypeRef) -> "TypeConversionPolicy":
        return cls(
            ty,
            cpp_conversion=CppConversionType.FROM_UNIQUE_PTR_TO_VALUE,
            rust_conversion=RustConversionType.FROM_STR,
        )

    @classmethod
    def box_up_subclass_holder(cls, ty: TypeRef, subclass: SubclassName) -> "TypeConversionPolicy":
        return cls(
            ty,
            rust_conversion=RustConversionType.TO_BOXED_UP_HOLDER,
            subclass=subclass,
        )

    @property
    def is_a_pointer(self) -> bool:
        return self.unwrapped_type.is_pointer
