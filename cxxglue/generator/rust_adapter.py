"""Rust call-site adapters for generated C++ wrappers.

Each adapter takes the idiomatic Rust parameters, converts them with the
same policies the C++ wrapper was generated from, and forwards to the
bridge function.
"""

from typing import Iterable

from cxxglue import conversion
from cxxglue.logging import get_logger

from .generator_types import AdditionalNeed, FunctionWrapper, FunctionWrapperNeed
from .templates import RustAdapterContext, render_rust_adapter_fn

logger = get_logger(__name__)

RUST_RECEIVER_NAME = "self_"


def _rust_arg_name(is_a_method: bool, counter: int) -> str:
    if is_a_method and counter == 0:
        return RUST_RECEIVER_NAME
    return f"arg{counter}"


def _needs_mut_binding(policy: conversion.TypeConversionPolicy) -> bool:
    # the pinned MoveRef is reborrowed with `as_mut`
    return policy.rust_conversion is conversion.RustConversionType.FROM_PIN_MOVE_REF_TO_PTR


def render_rust_adapter(
    wrapper: FunctionWrapper,
    bridge_path: str = "ffi",
    requires_unsafe_wrapping: bool = False,
) -> str:
    params: list[str] = []
    setup_lines: list[str] = []
    call_args: list[str] = []
    is_unsafe = False

    for counter, policy in enumerate(wrapper.argument_conversion):
        arg_name = _rust_arg_name(wrapper.is_a_method, counter)
        binding = f"mut {arg_name}" if _needs_mut_binding(policy) else arg_name
        params.append(f"{binding}: {conversion.boundary_facing_type(policy)}")
        setup, expr = conversion.adapt(policy, arg_name, requires_unsafe_wrapping)
        if setup is not None:
            setup_lines.append(setup)
        call_args.append(expr)
        is_unsafe = is_unsafe or conversion.needs_unsafe(policy, requires_unsafe_wrapping)

    return_type = None
    if wrapper.return_conversion is not None:
        return_type = conversion.converted_rust_type(wrapper.return_conversion)

    name = wrapper.wrapper_function_name
    context = RustAdapterContext.create(
        name=name,
        is_unsafe=is_unsafe,
        params=params,
        return_type=return_type,
        setup_lines=setup_lines,
        call=f"{bridge_path}::{name}({', '.join(call_args)})",
    )
    return render_rust_adapter_fn(context)


def render_rust_adapters(
    needs: Iterable[AdditionalNeed],
    bridge_path: str = "ffi",
    requires_unsafe_wrapping: bool = False,
) -> list[str]:
    adapters = [
        render_rust_adapter(need.wrapper, bridge_path, requires_unsafe_wrapping)
        for need in needs
        if isinstance(need, FunctionWrapperNeed)
    ]
    logger.debug("rendered %d rust adapter(s)", len(adapters))
    return adapters
