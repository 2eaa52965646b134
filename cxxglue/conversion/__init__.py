from .conversion_types import (ContractViolation, CppConversionType,
                               RustConversionType, SubclassName,
                               TypeConversionPolicy)
from .policy_cpp import conversion, converted_type, unconverted_type
from .policy_rs import (adapt, binding_identifier, boundary_facing_type,
                        converted_rust_type, needs_unsafe)
from .rust_types import (Lifetime, PathType, PointerType, ReferenceType,
                         TypeRef, TypeResolver, parse_type)

__all__ = [
    'ContractViolation',
    'CppConversionType',
    'Lifetime',
    'PathType',
    'PointerType',
    'ReferenceType',
    'RustConversionType',
    'SubclassName',
    'TypeConversionPolicy',
    'TypeRef',
    'TypeResolver',
    'adapt',
    'binding_identifier',
    'boundary_facing_type',
    'conversion',
    'converted_rust_type',
    'converted_type',
    'needs_unsafe',
    'parse_type',
    'unconverted_type',
]
