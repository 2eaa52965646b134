from .additional_cpp_generator import (DEFAULT_UMBRELLA_HEADER,
                                       RECEIVER_ARG_NAME,
                                       AdditionalCppGenerator)
from .generator_types import (AdditionalCpp, AdditionalFunction,
                              AdditionalNeed, ConstructorPayload,
                              FunctionCallPayload, FunctionWrapper,
                              FunctionWrapperNeed, Header,
                              MakeStringConstructorNeed,
                              StaticMethodCallPayload)
from .rust_adapter import render_rust_adapter, render_rust_adapters

__all__ = [
    'AdditionalCpp',
    'AdditionalCppGenerator',
    'AdditionalFunction',
    'AdditionalNeed',
    'ConstructorPayload',
    'DEFAULT_UMBRELLA_HEADER',
    'FunctionCallPayload',
    'FunctionWrapper',
    'FunctionWrapperNeed',
    'Header',
    'MakeStringConstructorNeed',
    'RECEIVER_ARG_NAME',
    'StaticMethodCallPayload',
    'render_rust_adapter',
    'render_rust_adapters',
]
