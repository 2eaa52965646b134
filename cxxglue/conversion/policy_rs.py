"""Rust side of a conversion policy.

For each argument of a generated wrapper this decides the type a Rust
caller sees and the expression that turns the caller's value into what
the C++ wrapper expects. Nothing here holds state; every function is a
pure function of the policy.
"""

import re
from typing import Optional

from cxxglue.logging import get_logger

from .conversion_types import (ContractViolation, CppConversionType,
                               RustConversionType, TypeConversionPolicy)
from .rust_types import TypeRef, pointee_of

logger = get_logger(__name__)

_BINDING_RE = re.compile(r"(?:ref\s+)?(?:mut\s+)?([A-Za-z_][A-Za-z0-9_]*)")

_RUST_KEYWORDS = {
    "as", "break", "const", "continue", "crate", "else", "enum", "extern",
    "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct",
    "super", "trait", "true", "type", "unsafe", "use", "where", "while",
}


def binding_identifier(pattern: str) -> str:
    """Return ``x`` for the identifier patterns ``x``, ``mut x`` and ``ref x``.

    Anything else (tuples, structs, wildcards, literals) is rejected.
    """
    if not isinstance(pattern, str):
        raise ContractViolation("pattern", f"expected a binding pattern, got {pattern!r}")
    m = _BINDING_RE.fullmatch(pattern.strip())
    if not m:
        raise ContractViolation("pattern", f"not an identifier pattern: {pattern!r}")
    ident = m.group(1)
    if ident == "_" or ident in _RUST_KEYWORDS:
        raise ContractViolation("pattern", f"not an identifier pattern: {pattern!r}")
    return ident


def _require_pointee(policy: TypeConversionPolicy) -> TypeRef:
    pointee = pointee_of(policy.unwrapped_type)
    if pointee is None:
        raise ContractViolation(
            "unwrapped_type",
            f"{policy.rust_conversion.name} needs a pointer type, got {policy.unwrapped_type.to_rust()}",
        )
    return pointee


def converted_rust_type(policy: TypeConversionPolicy) -> str:
    match policy.cpp_conversion:
        case CppConversionType.FROM_UNIQUE_PTR_TO_VALUE | CppConversionType.FROM_VALUE_TO_UNIQUE_PTR:
            return f"cxx::UniquePtr<{policy.unwrapped_type.to_rust()}>"
        case _:
            return policy.unwrapped_type.to_rust()


def boundary_facing_type(policy: TypeConversionPolicy) -> str:
    """Type of the parameter as a Rust caller of the wrapper writes it."""
    match policy.rust_conversion:
        case RustConversionType.NONE:
            return converted_rust_type(policy)
        case RustConversionType.TO_BOXED_UP_HOLDER:
            sub_id = policy.subclass.id()
            return f"autocxx::subclass::CppSubclassRustPeerHolder<super::super::super::{sub_id}>"
        case RustConversionType.FROM_STR:
            return "impl ToCppString"
        case RustConversionType.FROM_PIN_MAYBE_UNINIT_TO_PTR:
            ty = _require_pointee(policy).to_rust()
            return f"::std::pin::Pin<&mut ::std::mem::MaybeUninit<{ty}>>"
        case RustConversionType.FROM_PIN_MOVE_REF_TO_PTR:
            ty = _require_pointee(policy).to_rust()
            return f"::std::pin::Pin<autocxx::moveit::MoveRef<'_, {ty}>>"
        case RustConversionType.FROM_TYPE_TO_PTR:
            ty = _require_pointee(policy).to_rust()
            return f"&mut {ty}"
        case RustConversionType.FROM_VALUE_PARAM_TO_PTR:
            return f"impl autocxx::ValueParam<{policy.unwrapped_type.to_rust()}>"


def needs_unsafe(policy: TypeConversionPolicy, wrap_in_unsafe: bool) -> bool:
    """Whether ``adapt`` output must sit inside an unsafe context."""
    match policy.rust_conversion:
        case RustConversionType.FROM_PIN_MAYBE_UNINIT_TO_PTR | RustConversionType.FROM_PIN_MOVE_REF_TO_PTR:
            return True
        case RustConversionType.FROM_VALUE_PARAM_TO_PTR:
            return not wrap_in_unsafe
        case _:
            return False


def adapt(
    policy: TypeConversionPolicy,
    var: str,
    wrap_in_unsafe: bool,
) -> tuple[Optional[str], str]:
    """Return ``(setup, expression)`` converting ``var`` for the wrapper call.

    ``setup`` is a block of statements that must run before the call, or
    None when the expression stands alone.
    """
    match policy.rust_conversion:
        case RustConversionType.NONE:
            return None, var
        case RustConversionType.FROM_STR:
            return None, f"{var}.into_cpp()"
        case RustConversionType.TO_BOXED_UP_HOLDER:
            return None, f"Box::new({policy.subclass.holder()}({var}))"
        case RustConversionType.FROM_PIN_MAYBE_UNINIT_TO_PTR:
            return None, f"{var}.get_unchecked_mut().as_mut_ptr()"
        case RustConversionType.FROM_PIN_MOVE_REF_TO_PTR:
            return None, (
                "{ let r: &mut _ = ::std::pin::Pin::into_inner_unchecked("
                f"{var}.as_mut()); r }}"
            )
        case RustConversionType.FROM_TYPE_TO_PTR:
            return None, var
        case RustConversionType.FROM_VALUE_PARAM_TO_PTR:
            var_name = binding_identifier(var)
            space_var_name = f"{var_name}_space"
            call = f"{space_var_name}.populate()"
            if wrap_in_unsafe:
                call = f"unsafe {{ {call} }}"
            setup = "\n".join([
                f"let mut {space_var_name} = autocxx::ValueParamHandler::new({var_name});",
                f"let {space_var_name} = &mut {space_var_name};",
                f"{call};",
            ])
            logger.debug("value param %s materialized through %s", var_name, space_var_name)
            return setup, f"{space_var_name}.get_ptr()"
