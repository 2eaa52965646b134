from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

from jinja2 import Environment, FileSystemLoader

_TEMPLATE_DIR = Path(__file__).with_name("templates")


@lru_cache(maxsize=None)
def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(_TEMPLATE_DIR),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _normalize_lines(lines: Iterable[str]) -> tuple[str, ...]:
    normalized: list[str] = []
    for entry in lines:
        if entry is None:
            continue
        parts = str(entry).splitlines()
        if not parts:
            normalized.append("")
            continue
        normalized.extend(parts)
    return tuple(normalized)


@dataclass(frozen=True)
class RustAdapterContext:
    """Template inputs for one Rust call-site adapter."""

    name: str
    is_unsafe: bool
    params: tuple[str, ...]
    return_type: str | None
    setup_lines: tuple[str, ...]
    call: str

    @classmethod
    def create(
        cls,
        *,
        name: str,
        is_unsafe: bool,
        params: Iterable[str],
        return_type: str | None,
        setup_lines: Iterable[str],
        call: str,
    ) -> "RustAdapterContext":
        return cls(
            name=name,
            is_unsafe=is_unsafe,
            params=tuple(params),
            return_type=return_type,
            setup_lines=_normalize_lines(setup_lines),
            call=call,
        )

    def as_template_args(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "is_unsafe": self.is_unsafe,
            "params": self.params,
            "return_type": self.return_type,
            "setup_lines": self.setup_lines,
            "call": self.call,
        }


def render_rust_adapter_fn(context: RustAdapterContext) -> str:
    template = _get_env().get_template("rust_adapter.rs.j2")
    return template.render(context.as_template_args()).rstrip("\n")


def render_header_file(declarations: str) -> str:
    template = _get_env().get_template("header.h.j2")
    return template.render(declarations=declarations)


def render_source_file(definitions: str) -> str:
    template = _get_env().get_template("source.cc.j2")
    return template.render(definitions=definitions)


def render_adapters_file(adapters: Iterable[str], bridge_path: str) -> str:
    template = _get_env().get_template("adapters.rs.j2")
    return template.render(adapters=tuple(adapters), bridge_path=bridge_path)
