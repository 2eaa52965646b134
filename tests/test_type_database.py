from cxxglue.type_database import TypeDatabase, get_primitive_map


def test_primitive_map_contains_expected_entries():
    mapping = get_primitive_map()
    assert mapping["i32"] == "int32_t"
    assert mapping["usize"] == "size_t"
    assert mapping["c_int"] == "int"


def test_explicit_mapping_wins():
    db = TypeDatabase({"i32": "int"})
    assert db.resolve("i32") == "int"
    assert "i32" in db


def test_resolve_fallbacks():
    db = TypeDatabase()
    assert db.resolve("u8") == "uint8_t"
    assert db.resolve("std::os::raw::c_char") == "char"
    assert db.resolve("root::a::Foo") == "a::Foo"
    assert db.resolve("int") == "int"


def test_register():
    db = TypeDatabase()
    db.register("root::Foo", "bar::Foo")
    assert db.resolve("root::Foo") == "bar::Foo"
