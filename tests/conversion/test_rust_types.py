import pytest

from cxxglue.conversion.rust_types import (Lifetime, PathType,
                                           PointerType, ReferenceType,
                                           TypeRef, parse_type, pointee_of)
from cxxglue.type_database import TypeDatabase


def test_parse_raw_pointers():
    ty = parse_type("*mut root::Foo")
    assert ty == PointerType(PathType("root::Foo"), mutable=True)
    assert ty.is_pointer

    const_ty = parse_type("*const u8")
    assert const_ty == PointerType(PathType("u8"), mutable=False)


def test_parse_references_with_lifetime():
    assert parse_type("&mut Bar") == ReferenceType(PathType("Bar"), mutable=True)
    assert parse_type("&'a Bar") == ReferenceType(PathType("Bar"), mutable=False)
    assert parse_type("&'a mut Bar") == ReferenceType(PathType("Bar"), mutable=True)


def test_parse_nested_generics():
    ty = parse_type("cxx::UniquePtr<std::vector<i32>>")
    assert ty == PathType("cxx::UniquePtr", (PathType("std::vector", (PathType("i32"),)),))
    assert ty.to_rust() == "cxx::UniquePtr<std::vector<i32>>"


def test_parse_rejects_bad_input():
    with pytest.raises(ValueError):
        parse_type("")
    with pytest.raises(ValueError):
        parse_type("*Foo")
    with pytest.raises(ValueError):
        parse_type("Foo<i32")
    with pytest.raises(ValueError):
        parse_type("(i32, i32)")


def test_cpp_spelling():
    db = TypeDatabase({"root::ns::Foo": "ns::Foo"})
    assert parse_type("*mut root::ns::Foo").to_cpp(db) == "ns::Foo*"
    assert parse_type("*const i32").to_cpp(db) == "const int32_t*"
    assert parse_type("&root::ns::Foo").to_cpp(db) == "const ns::Foo&"
    assert parse_type("&mut root::ns::Foo").to_cpp(db) == "ns::Foo&"


def test_pointee_of():
    assert pointee_of(parse_type("*mut Foo")) == PathType("Foo")
    assert pointee_of(parse_type("&mut Foo")) is None
    assert pointee_of(PathType("Foo")) is None


def test_str_is_rust_spelling():
    assert str(parse_type("*const  Foo")) == "*const Foo"


def test_parse_lifetime_generic_argument():
    ty = parse_type("autocxx::moveit::MoveRef<'a, root::Foo>")
    assert ty == PathType("autocxx::moveit::MoveRef", (Lifetime("'a"), PathType("root::Foo")))
    assert ty.to_rust() == "autocxx::moveit::MoveRef<'a, root::Foo>"


def test_lifetimes_dropped_from_cpp_spelling():
    db = TypeDatabase({"root::ns::Foo": "ns::Foo"})
    assert parse_type("Wrapper<'a, root::ns::Foo>").to_cpp(db) == "Wrapper<ns::Foo>"
    assert parse_type("Guard<'a>").to_cpp(db) == "Guard"
    with pytest.raises(ValueError):
        Lifetime("'a").to_cpp(db)


def test_type_ref_is_abstract():
    with pytest.raises(TypeError):
        TypeRef()
