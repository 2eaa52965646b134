from .conversion_types import CppConversionType, TypeConversionPolicy
from .rust_types import TypeResolver


def unwrapped_type_as_string(policy: TypeConversionPolicy, resolver: TypeResolver) -> str:
    return policy.unwrapped_type.to_cpp(resolver)


def _unique_ptr_wrapped_type(policy: TypeConversionPolicy, resolver: TypeResolver) -> str:
    return f"std::unique_ptr<{unwrapped_type_as_string(policy, resolver)}>"


def unconverted_type(policy: TypeConversionPolicy, resolver: TypeResolver) -> str:
    """C++ type of the value as it crosses the boundary into the wrapper."""
    match policy.cpp_conversion:
        case CppConversionType.FROM_UNIQUE_PTR_TO_VALUE:
            return _unique_ptr_wrapped_type(policy, resolver)
        case CppConversionType.FROM_PTR_TO_VALUE | CppConversionType.FROM_PTR_TO_MOVE:
            return f"{unwrapped_type_as_string(policy, resolver)}*"
        case CppConversionType.NONE | CppConversionType.FROM_VALUE_TO_UNIQUE_PTR:
            return unwrapped_type_as_string(policy, resolver)


def converted_type(policy: TypeConversionPolicy, resolver: TypeResolver) -> str:
    """C++ type of the value after the wrapper has converted it."""
    match policy.cpp_conversion:
        case CppConversionType.FROM_VALUE_TO_UNIQUE_PTR:
            return _unique_ptr_wrapped_type(policy, resolver)
        case (CppConversionType.NONE
              | CppConversionType.FROM_UNIQUE_PTR_TO_VALUE
              | CppConversionType.FROM_PTR_TO_VALUE
              | CppConversionType.FROM_PTR_TO_MOVE):
            return unwrapped_type_as_string(policy, resolver)


def conversion(policy: TypeConversionPolicy, var_name: str, resolver: TypeResolver) -> str:
    match policy.cpp_conversion:
        case CppConversionType.NONE:
            return var_name
        case CppConversionType.FROM_UNIQUE_PTR_TO_VALUE | CppConversionType.FROM_PTR_TO_MOVE:
            return f"std::move(*{var_name})"
        case CppConversionType.FROM_PTR_TO_VALUE:
            return f"*{var_name}"
        case CppConversionType.FROM_VALUE_TO_UNIQUE_PTR:
            return f"std::make_unique<{unconverted_type(policy, resolver)}>({var_name})"
