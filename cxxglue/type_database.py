"""Resolution of Rust type paths to their C++ spelling."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Mapping, Optional, Tuple

from cxxglue import utils

_RESOURCE_NAME = "cpp_type_map.txt"
_ROOT_PREFIX = "root::"
_RAW_PREFIXES = ("std::os::raw::", "libc::")


@lru_cache(maxsize=1)
def _load_cpp_type_pairs() -> Tuple[Tuple[str, str], ...]:
    text = utils.read_resource_text(_RESOURCE_NAME)
    pairs: list[Tuple[str, str]] = []

    for idx, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise ValueError(
                f"Invalid entry in {_RESOURCE_NAME} on line {idx}: '{raw_line}'"
            )
        lhs, rhs = line.split("=", 1)
        lhs = lhs.strip()
        rhs = rhs.strip()
        if not lhs or not rhs:
            raise ValueError(
                f"Invalid entry in {_RESOURCE_NAME} on line {idx}: '{raw_line}'"
            )
        pairs.append((lhs, rhs))

    return tuple(pairs)


def get_primitive_map() -> Dict[str, str]:
    """Return the bundled Rust primitive to C++ spelling map."""

    return dict(_load_cpp_type_pairs())


class TypeDatabase:
    """Maps type identifiers to fully-qualified C++ names.

    Explicit entries win, then the bundled primitive map; anything else is
    taken to already be a C++ path, minus bindgen's ``root::`` prefix.
    """

    def __init__(self, mapping: Optional[Mapping[str, str]] = None):
        self._mapping: Dict[str, str] = dict(mapping or {})

    def register(self, type_id: str, cpp_name: str) -> None:
        self._mapping[type_id] = cpp_name

    def resolve(self, type_id: str) -> str:
        if type_id in self._mapping:
            return self._mapping[type_id]
        primitives = get_primitive_map()
        key = type_id
        if type_id.startswith(_RAW_PREFIXES):
            key = type_id.split("::")[-1]
        if key in primitives:
            return primitives[key]
        if type_id.startswith(_ROOT_PREFIX):
            return type_id[len(_ROOT_PREFIX):]
        return type_id

    def __contains__(self, type_id: str) -> bool:
        return type_id in self._mapping
