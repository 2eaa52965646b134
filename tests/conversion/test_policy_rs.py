import pytest

from cxxglue.conversion import (ContractViolation, CppConversionType,
                                PathType, PointerType, RustConversionType,
                                SubclassName, TypeConversionPolicy, adapt,
                                binding_identifier, boundary_facing_type,
                                needs_unsafe, parse_type)

FOO = PathType("root::Foo")
FOO_PTR = PointerType(FOO)


def _policy(kind: RustConversionType, ty=FOO_PTR, **kwargs) -> TypeConversionPolicy:
    return TypeConversionPolicy(ty, rust_conversion=kind, **kwargs)


def test_none_uses_converted_rust_type():
    assert boundary_facing_type(TypeConversionPolicy(parse_type("i32"))) == "i32"
    unique = TypeConversionPolicy.new_to_unique_ptr(FOO)
    assert boundary_facing_type(unique) == "cxx::UniquePtr<root::Foo>"
    assert adapt(unique, "x", False) == (None, "x")


def test_string_conversion():
    policy = TypeConversionPolicy.new_from_str(PathType("std::string"))
    assert policy.cpp_conversion is CppConversionType.FROM_UNIQUE_PTR_TO_VALUE
    assert boundary_facing_type(policy) == "impl ToCppString"
    assert adapt(policy, "name", False) == (None, "name.into_cpp()")


def test_boxed_holder_conversion():
    policy = TypeConversionPolicy.box_up_subclass_holder(FOO, SubclassName("MyObserver"))
    assert boundary_facing_type(policy) == (
        "autocxx::subclass::CppSubclassRustPeerHolder<super::super::super::MyObserver>"
    )
    assert adapt(policy, "peer", False) == (None, "Box::new(MyObserverHolder(peer))")


def test_boxed_holder_requires_subclass():
    with pytest.raises(ContractViolation) as excinfo:
        _policy(RustConversionType.TO_BOXED_UP_HOLDER, FOO)
    assert excinfo.value.field == "subclass"


def test_pin_maybe_uninit():
    policy = _policy(RustConversionType.FROM_PIN_MAYBE_UNINIT_TO_PTR)
    assert boundary_facing_type(policy) == (
        "::std::pin::Pin<&mut ::std::mem::MaybeUninit<root::Foo>>"
    )
    assert adapt(policy, "this", False) == (None, "this.get_unchecked_mut().as_mut_ptr()")


def test_pin_move_ref():
    policy = _policy(RustConversionType.FROM_PIN_MOVE_REF_TO_PTR)
    assert boundary_facing_type(policy) == "::std::pin::Pin<autocxx::moveit::MoveRef<'_, root::Foo>>"
    setup, expr = adapt(policy, "other", False)
    assert setup is None
    assert expr == "{ let r: &mut _ = ::std::pin::Pin::into_inner_unchecked(other.as_mut()); r }"


def test_type_to_ptr():
    policy = _policy(RustConversionType.FROM_TYPE_TO_PTR)
    assert boundary_facing_type(policy) == "&mut root::Foo"
    assert adapt(policy, "arg1", False) == (None, "arg1")


@pytest.mark.parametrize("kind", [
    RustConversionType.FROM_PIN_MAYBE_UNINIT_TO_PTR,
    RustConversionType.FROM_PIN_MOVE_REF_TO_PTR,
    RustConversionType.FROM_TYPE_TO_PTR,
])
def test_pointer_variants_reject_non_pointer(kind):
    assert kind.requires_pointer
    with pytest.raises(ContractViolation) as excinfo:
        boundary_facing_type(_policy(kind, FOO))
    assert excinfo.value.field == "unwrapped_type"


def test_value_param_type_is_not_pointer_checked():
    policy = _policy(RustConversionType.FROM_VALUE_PARAM_TO_PTR, FOO,
                     cpp_conversion=CppConversionType.FROM_PTR_TO_MOVE)
    assert not RustConversionType.FROM_VALUE_PARAM_TO_PTR.requires_pointer
    assert boundary_facing_type(policy) == "impl autocxx::ValueParam<root::Foo>"


def test_value_param_setup_without_unsafe():
    policy = _policy(RustConversionType.FROM_VALUE_PARAM_TO_PTR, FOO)
    setup, expr = adapt(policy, "x", False)
    assert setup == (
        "let mut x_space = autocxx::ValueParamHandler::new(x);\n"
        "let x_space = &mut x_space;\n"
        "x_space.populate();"
    )
    assert "unsafe" not in setup
    assert expr == "x_space.get_ptr()"


def test_value_param_setup_with_unsafe():
    policy = _policy(RustConversionType.FROM_VALUE_PARAM_TO_PTR, FOO)
    setup, expr = adapt(policy, "mut x", True)
    assert setup.splitlines()[0] == "let mut x_space = autocxx::ValueParamHandler::new(x);"
    assert setup.splitlines()[-1] == "unsafe { x_space.populate() };"
    assert expr == "x_space.get_ptr()"


@pytest.mark.parametrize("pattern", ["(a, b)", "Foo { a }", "_", "1", "true", "", "a b"])
def test_value_param_rejects_non_identifier_patterns(pattern):
    policy = _policy(RustConversionType.FROM_VALUE_PARAM_TO_PTR, FOO)
    with pytest.raises(ContractViolation) as excinfo:
        adapt(policy, pattern, False)
    assert excinfo.value.field == "pattern"


def test_binding_identifier_accepts_mut_and_ref():
    assert binding_identifier("x") == "x"
    assert binding_identifier("mut value") == "value"
    assert binding_identifier("ref  other") == "other"


def test_needs_unsafe():
    value_param = _policy(RustConversionType.FROM_VALUE_PARAM_TO_PTR, FOO)
    assert needs_unsafe(value_param, False)
    assert not needs_unsafe(value_param, True)
    assert needs_unsafe(_policy(RustConversionType.FROM_PIN_MOVE_REF_TO_PTR), True)
    assert not needs_unsafe(_policy(RustConversionType.FROM_TYPE_TO_PTR), False)
