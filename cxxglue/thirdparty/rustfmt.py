import shutil
from typing_extensions import override

from cxxglue import utils

from .thirdparty import ThirdParty


class RustFmt(ThirdParty):
    def __init__(self, file_path):
        self.file_path = file_path

    @staticmethod
    @override
    def check_requirements() -> list[str]:
        if not shutil.which("rustfmt"):
            return ["rustfmt"]
        return []

    def format(self):
        cmd = ["rustfmt", "--edition", "2021", self.file_path]
        result = utils.run_command(cmd)
        if result.returncode != 0:
            raise OSError(f"Failed to format the file: {self.file_path}\n{result.stderr}")
