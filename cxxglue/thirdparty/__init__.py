from .clang_format import ClangFormat
from .rustfmt import RustFmt
from .thirdparty import ThirdParty


def check_all_requirements() -> list[str]:
    result = []
    result.extend(RustFmt.check_requirements())
    result.extend(ClangFormat.check_requirements())
    return result


__all__ = [
    'ClangFormat',
    'RustFmt',
    'ThirdParty',
    'check_all_requirements',
]
