"""Structural model of the Rust types carried by conversion policies.

Only the shapes the wrapper generator needs to look through are modelled:
paths (with optional generic arguments, lifetimes included), raw pointers
and references.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Protocol

PATH_RE = re.compile(r"(?:::)?[A-Za-z_][A-Za-z0-9_]*(?:::[A-Za-z_][A-Za-z0-9_]*)*")
LIFETIME_RE = re.compile(r"'[A-Za-z_][A-Za-z0-9_]*")
_REF_LIFETIME_PREFIX_RE = re.compile(r"'[A-Za-z_][A-Za-z0-9_]*\s+")


class TypeResolver(Protocol):
    def resolve(self, type_id: str) -> str:
        ...


class TypeRef(ABC):
    is_pointer = False

    @abstractmethod
    def to_rust(self) -> str:
        """Rust spelling of the type."""

    @abstractmethod
    def to_cpp(self, resolver: TypeResolver) -> str:
        """C++ spelling of the type, with paths resolved through `resolver`."""

    def __str__(self) -> str:
        return self.to_rust()


@dataclass(frozen=True)
class Lifetime(TypeRef):
    """A lifetime generic argument such as `'a`; it has no C++ spelling."""
    name: str

    def to_rust(self) -> str:
        return self.name

    def to_cpp(self, resolver: TypeResolver) -> str:
        raise ValueError(f"Lifetime {self.name} has no C++ spelling")


@dataclass(frozen=True)
class PathType(TypeRef):
    path: str
    generics: tuple[TypeRef, ...] = field(default_factory=tuple)

    def to_rust(self) -> str:
        if not self.generics:
            return self.path
        args = ", ".join(arg.to_rust() for arg in self.generics)
        return f"{self.path}<{args}>"

    def to_cpp(self, resolver: TypeResolver) -> str:
        base = resolver.resolve(self.path)
        type_args = [arg for arg in self.generics if not isinstance(arg, Lifetime)]
        if not type_args:
            return base
        args = ", ".join(arg.to_cpp(resolver) for arg in type_args)
        return f"{base}<{args}>"


@dataclass(frozen=True)
class PointerType(TypeRef):
    pointee: TypeRef
    mutable: bool = True

    is_pointer = True

    def to_rust(self) -> str:
        qualifier = "mut" if self.mutable else "const"
        return f"*{qualifier} {self.pointee.to_rust()}"

    def to_cpp(self, resolver: TypeResolver) -> str:
        inner = self.pointee.to_cpp(resolver)
        if self.mutable:
            return f"{inner}*"
        return f"const {inner}*"


@dataclass(frozen=True)
class ReferenceType(TypeRef):
    referent: TypeRef
    mutable: bool = False

    def to_rust(self) -> str:
        if self.mutable:
            return f"&mut {self.referent.to_rust()}"
        return f"&{self.referent.to_rust()}"

    def to_cpp(self, resolver: TypeResolver) -> str:
        inner = self.referent.to_cpp(resolver)
        if self.mutable:
            return f"{inner}&"
        return f"const {inner}&"


def _split_generic_args(text: str) -> list[str]:
    args: list[str] = []
    depth = 0
    start = 0
    for idx, ch in enumerate(text):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Unbalanced '>' in generic arguments: {text!r}")
        elif ch == "," and depth == 0:
            args.append(text[start:idx])
            start = idx + 1
    if depth != 0:
        raise ValueError(f"Unbalanced '<' in generic arguments: {text!r}")
    tail = text[start:]
    if tail.strip():
        args.append(tail)
    return args


def parse_type(text: str) -> TypeRef:
    """Parse a Rust type spelling such as ``*mut root::Foo`` or ``&mut Bar``."""
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Empty type")
    stripped = text.strip()

    if stripped.startswith("*"):
        rest = stripped[1:].lstrip()
        for qualifier, mutable in (("mut", True), ("const", False)):
            if rest.startswith(qualifier) and rest[len(qualifier):len(qualifier) + 1].isspace():
                return PointerType(parse_type(rest[len(qualifier):]), mutable=mutable)
        raise ValueError(f"Raw pointer without mut/const qualifier: {text!r}")

    if LIFETIME_RE.fullmatch(stripped):
        return Lifetime(stripped)

    if stripped.startswith("&"):
        rest = _REF_LIFETIME_PREFIX_RE.sub("", stripped[1:].lstrip(), count=1)
        if rest.startswith("mut") and rest[3:4].isspace():
            return ReferenceType(parse_type(rest[3:]), mutable=True)
        return ReferenceType(parse_type(rest), mutable=False)

    m = PATH_RE.match(stripped)
    if not m:
        raise ValueError(f"Unsupported type: {text!r}")
    path = m.group(0)
    rest = stripped[m.end():].strip()
    if not rest:
        return PathType(path)
    if rest.startswith("<") and rest.endswith(">"):
        generics = tuple(parse_type(arg) for arg in _split_generic_args(rest[1:-1]))
        return PathType(path, generics)
    raise ValueError(f"Unsupported type: {text!r}")


def pointee_of(ty: TypeRef) -> TypeRef | None:
    if isinstance(ty, PointerType):
        return ty.pointee
    return None
