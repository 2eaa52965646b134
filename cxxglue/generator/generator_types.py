from dataclasses import dataclass, field
from typing import Optional, Union

from cxxglue.conversion import TypeConversionPolicy


@dataclass(frozen=True, order=True)
class Header:
    name: str
    system: bool

    @classmethod
    def system_header(cls, name: str) -> "Header":
        return cls(name, True)

    @classmethod
    def user_header(cls, name: str) -> "Header":
        return cls(name, False)

    def include_stmt(self) -> str:
        if self.system:
            return f"#include <{self.name}>"
        return f"#include \"{self.name}\""

    def sort_key(self) -> tuple[bool, str]:
        # system headers first
        return (not self.system, self.name)


@dataclass(frozen=True)
class ConstructorPayload:
    pass


@dataclass(frozen=True)
class FunctionCallPayload:
    ident: str
    namespace: tuple[str, ...] = ()


@dataclass(frozen=True)
class StaticMethodCallPayload:
    namespace: tuple[str, ...]
    type_ident: str
    fn_ident: str


FunctionWrapperPayload = Union[ConstructorPayload, FunctionCallPayload, StaticMethodCallPayload]


@dataclass(frozen=True)
class FunctionWrapper:
    wrapper_function_name: str
    payload: FunctionWrapperPayload
    argument_conversion: tuple[TypeConversionPolicy, ...] = ()
    return_conversion: Optional[TypeConversionPolicy] = None
    is_a_method: bool = False


@dataclass(frozen=True)
class MakeStringConstructorNeed:
    pass


@dataclass(frozen=True)
class FunctionWrapperNeed:
    wrapper: FunctionWrapper


AdditionalNeed = Union[MakeStringConstructorNeed, FunctionWrapperNeed]


@dataclass(frozen=True)
class AdditionalFunction:
    declaration: str
    definition: str
    headers: tuple[Header, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AdditionalCpp:
    declarations: str
    definitions: str
