from typing import Callable, Iterable, Optional

from cxxglue import conversion
from cxxglue.conversion import ContractViolation, TypeResolver
from cxxglue.logging import get_logger

from .generator_types import (AdditionalCpp, AdditionalFunction,
                              AdditionalNeed, ConstructorPayload,
                              FunctionCallPayload, FunctionWrapper,
                              FunctionWrapperNeed, Header,
                              MakeStringConstructorNeed,
                              StaticMethodCallPayload)

logger = get_logger(__name__)

DEFAULT_UMBRELLA_HEADER = "autocxxgen.h"
# Lets the second bindgen pass recognize a generated wrapper as a method.
RECEIVER_ARG_NAME = "autocxx_gen_this"
STRING_CONSTRUCTOR_DECLARATION = "std::unique_ptr<std::string> make_string(::rust::Str str)"


def wrapper_arg_name(is_a_method: bool, counter: int) -> str:
    if is_a_method and counter == 0:
        return RECEIVER_ARG_NAME
    return f"arg{counter}"


class AdditionalCppGenerator:
    """Generates the extra C++ glue functions the bridge cannot express.

    Needs are turned into functions as they are submitted; ``materialize``
    then joins them into a declarations block for a header and a
    definitions block for a translation unit.
    """

    def __init__(self, inclusions: str = "", umbrella_header: str = DEFAULT_UMBRELLA_HEADER):
        self.inclusions = inclusions
        self.umbrella_header = umbrella_header
        self.additional_functions: list[AdditionalFunction] = []

    def submit(self, needs: Iterable[AdditionalNeed], type_database: TypeResolver) -> None:
        for need in needs:
            match need:
                case MakeStringConstructorNeed():
                    self._generate_string_constructor()
                case FunctionWrapperNeed(wrapper=wrapper):
                    self._generate_by_value_wrapper(wrapper, type_database)
                case _:
                    raise TypeError(f"Unknown need: {need!r}")
            logger.debug(
                "need %d: generated %s",
                len(self.additional_functions) - 1,
                self.additional_functions[-1].declaration,
            )

    def materialize(self) -> Optional[AdditionalCpp]:
        if not self.additional_functions:
            return None
        headers: set[Header] = set()
        for function in self.additional_functions:
            headers.update(function.headers)
        header_block = "\n".join(
            header.include_stmt() for header in sorted(headers, key=Header.sort_key)
        )
        declarations = self._concat_additional_items(lambda x: x.declaration)
        declarations = f"{header_block}\n{self.inclusions}\n{declarations}"
        definitions = self._concat_additional_items(lambda x: x.definition)
        definitions = f"#include \"{self.umbrella_header}\"\n{definitions}"
        logger.info(
            "materialized %d glue function(s) with %d header(s)",
            len(self.additional_functions),
            len(headers),
        )
        return AdditionalCpp(declarations=declarations, definitions=definitions)

    def _concat_additional_items(self, field_access: Callable[[AdditionalFunction], str]) -> str:
        return "\n".join(field_access(x) for x in self.additional_functions) + "\n"

    def _generate_string_constructor(self) -> None:
        declaration = STRING_CONSTRUCTOR_DECLARATION
        definition = f"{declaration} {{ return std::make_unique<std::string>(std::string(str)); }}"
        self.additional_functions.append(AdditionalFunction(
            declaration=f"{declaration};",
            definition=definition,
            headers=(
                Header.system_header("memory"),
                Header.system_header("string"),
                Header.user_header("cxx.h"),
            ),
        ))

    def _generate_by_value_wrapper(self, details: FunctionWrapper, type_database: TypeResolver) -> None:
        # The wrapper always lives in the global namespace, whatever the
        # namespace of the function it calls.
        is_a_method = details.is_a_method
        arguments = details.argument_conversion
        if is_a_method:
            if not arguments:
                raise ContractViolation(
                    "argument_conversion",
                    f"method wrapper {details.wrapper_function_name} has no receiver argument",
                )
            if isinstance(details.payload, StaticMethodCallPayload):
                raise ContractViolation(
                    "is_a_method",
                    f"static method wrapper {details.wrapper_function_name} cannot take a receiver",
                )

        args = ", ".join(
            f"{conversion.unconverted_type(ty, type_database)} {wrapper_arg_name(is_a_method, counter)}"
            for counter, ty in enumerate(arguments)
        )
        if details.return_conversion is None:
            ret_type = "void"
        else:
            ret_type = conversion.converted_type(details.return_conversion, type_database)
        declaration = f"{ret_type} {details.wrapper_function_name}({args})"

        converted_args = [
            conversion.conversion(conv, wrapper_arg_name(is_a_method, counter), type_database)
            for counter, conv in enumerate(arguments)
        ]
        receiver = converted_args.pop(0) if is_a_method else None
        arg_list = ", ".join(converted_args)

        match details.payload:
            case ConstructorPayload():
                underlying_function_call = arg_list
            case FunctionCallPayload(ident=ident, namespace=namespace):
                if receiver is not None:
                    if receiver != RECEIVER_ARG_NAME:
                        # `*this.f()` would bind as `*(this.f())`
                        receiver = f"({receiver})"
                    underlying_function_call = f"{receiver}.{ident}({arg_list})"
                else:
                    qualified = "::".join([*namespace, ident])
                    underlying_function_call = f"{qualified}({arg_list})"
            case StaticMethodCallPayload(namespace=namespace, type_ident=type_ident, fn_ident=fn_ident):
                qualified = "::".join([*namespace, type_ident, fn_ident])
                underlying_function_call = f"{qualified}({arg_list})"
            case _:
                raise TypeError(f"Unknown wrapper payload: {details.payload!r}")

        if details.return_conversion is not None:
            underlying_function_call = "return " + conversion.conversion(
                details.return_conversion, underlying_function_call, type_database
            )
        definition = f"{declaration} {{ {underlying_function_call}; }}"
        self.additional_functions.append(AdditionalFunction(
            declaration=f"{declaration};",
            definition=definition,
            headers=(Header.system_header("memory"),),
        ))
