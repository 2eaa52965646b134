from cxxglue.generator.templates import (RustAdapterContext,
                                         render_adapters_file,
                                         render_header_file,
                                         render_rust_adapter_fn,
                                         render_source_file)


def test_rust_adapter_context_normalizes_setup_lines():
    context = RustAdapterContext.create(
        name="f",
        is_unsafe=False,
        params=["a: i32"],
        return_type=None,
        setup_lines=["let x = 1;\nlet y = 2;", None],
        call="ffi::f(a)",
    )
    assert context.setup_lines == ("let x = 1;", "let y = 2;")
    assert context.as_template_args()["params"] == ("a: i32",)


def test_render_rust_adapter_fn_without_return():
    context = RustAdapterContext.create(
        name="f",
        is_unsafe=True,
        params=[],
        return_type=None,
        setup_lines=[],
        call="ffi::f()",
    )
    assert render_rust_adapter_fn(context) == "pub unsafe fn f() {\n    ffi::f()\n}"


def test_render_header_file_has_pragma_once():
    rendered = render_header_file("#include <memory>\n\nvoid f();\n")
    assert "#pragma once\n\n#include <memory>\n" in rendered
    assert rendered.endswith("void f();\n")


def test_render_source_file_keeps_definitions():
    rendered = render_source_file("#include \"autocxxgen.h\"\nvoid f() { g(); }\n")
    assert rendered.endswith("#include \"autocxxgen.h\"\nvoid f() { g(); }\n")


def test_render_adapters_file_joins_functions():
    rendered = render_adapters_file(["pub fn a() {\n}", "pub fn b() {\n}"], "ffi")
    assert "pub fn a() {\n}\n\npub fn b() {\n}\n" in rendered
    assert "`ffi`" in rendered
