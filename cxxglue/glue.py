import os
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from cxxglue import utils
from cxxglue.generator import AdditionalCppGenerator, render_rust_adapters
from cxxglue.generator.templates import (render_adapters_file,
                                         render_header_file,
                                         render_source_file)
from cxxglue.logging import get_logger
from cxxglue.needs_loader import NeedsDocument, load_needs_file
from cxxglue.thirdparty import ClangFormat, RustFmt

logger = get_logger(__name__)


@dataclass
class GlueOutput:
    header_path: Optional[str] = None
    source_path: Optional[str] = None
    adapters_path: Optional[str] = None
    function_count: int = 0
    written: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.function_count == 0


class CxxGlue:
    """Drives one needs document through generation and writes the results."""

    def __init__(
        self,
        out_dir: str,
        config: dict[str, Any],
        header_name: Optional[str] = None,
        rustfmt: Optional[bool] = None,
        clang_format: Optional[bool] = None,
    ):
        generator_cfg = config.get("generator", {})
        format_cfg = config.get("format", {})
        self.out_dir = out_dir
        self.header_name = header_name or generator_cfg.get("header_name", "autocxxgen.h")
        self.umbrella_header = generator_cfg.get("umbrella_header") or self.header_name
        self.inclusions = generator_cfg.get("inclusions", "")
        self.bridge_path = generator_cfg.get("bridge_path", "ffi")
        self.wrap_unsafe = bool(generator_cfg.get("wrap_unsafe", False))
        self.rustfmt = format_cfg.get("rustfmt", False) if rustfmt is None else rustfmt
        self.clang_format = format_cfg.get("clang_format", False) if clang_format is None else clang_format

    def run_file(self, needs_path: str) -> GlueOutput:
        logger.info("Loading needs from %s", needs_path)
        return self.run(load_needs_file(needs_path))

    def run(self, document: NeedsDocument) -> GlueOutput:
        inclusions = "\n".join(part for part in (self.inclusions, document.inclusions) if part)
        generator = AdditionalCppGenerator(inclusions, umbrella_header=self.umbrella_header)
        generator.submit(document.needs, document.type_database)
        additional_cpp = generator.materialize()
        if additional_cpp is None:
            logger.info("No additional C++ needed; nothing written")
            return GlueOutput()

        stem, _ = os.path.splitext(self.header_name)
        output = GlueOutput(function_count=len(generator.additional_functions))
        output.header_path = self._write(
            self.header_name, render_header_file(additional_cpp.declarations), self._clang_format)
        output.source_path = self._write(
            f"{stem}.cc", render_source_file(additional_cpp.definitions), self._clang_format)

        adapters = render_rust_adapters(document.needs, self.bridge_path, self.wrap_unsafe)
        if adapters:
            output.adapters_path = self._write(
                f"{stem}_adapters.rs", render_adapters_file(adapters, self.bridge_path), self._rustfmt)
        output.written = [p for p in (output.header_path, output.source_path, output.adapters_path) if p]
        logger.info("Wrote %d file(s) to %s", len(output.written), self.out_dir)
        return output

    def _write(self, name: str, content: str, formatter: Callable[[str], None]) -> str:
        path = os.path.join(self.out_dir, name)
        utils.save_code(path, content)
        formatter(path)
        logger.debug("wrote %s", path)
        return path

    def _rustfmt(self, path: str) -> None:
        if not self.rustfmt:
            return
        if RustFmt.check_requirements():
            logger.warning("rustfmt not found; leaving %s unformatted", path)
            return
        try:
            RustFmt(path).format()
        except OSError as exc:
            logger.warning("Cannot format %s: %s", path, exc)  # allow to continue

    def _clang_format(self, path: str) -> None:
        if not self.clang_format:
            return
        if ClangFormat.check_requirements():
            logger.warning("clang-format not found; leaving %s unformatted", path)
            return
        try:
            ClangFormat(path).format()
        except OSError as exc:
            logger.warning("Cannot format %s: %s", path, exc)  # allow to continue
