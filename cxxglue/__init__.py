from cxxglue.conversion import (ContractViolation, CppConversionType,
                                RustConversionType, SubclassName,
                                TypeConversionPolicy, adapt,
                                boundary_facing_type, parse_type)
from cxxglue.generator import (AdditionalCpp, AdditionalCppGenerator,
                               ConstructorPayload, FunctionCallPayload,
                               FunctionWrapper, FunctionWrapperNeed,
                               MakeStringConstructorNeed,
                               StaticMethodCallPayload)
from cxxglue.glue import CxxGlue
from cxxglue.type_database import TypeDatabase

__all__ = [
    'AdditionalCpp',
    'AdditionalCppGenerator',
    'ConstructorPayload',
    'ContractViolation',
    'CppConversionType',
    'CxxGlue',
    'FunctionCallPayload',
    'FunctionWrapper',
    'FunctionWrapperNeed',
    'MakeStringConstructorNeed',
    'RustConversionType',
    'StaticMethodCallPayload',
    'SubclassName',
    'TypeConversionPolicy',
    'TypeDatabase',
    'adapt',
    'boundary_facing_type',
    'parse_type',
]
