import pytest

from cxxglue import utils
from cxxglue.thirdparty import ClangFormat, RustFmt, check_all_requirements


def test_missing_tools_reported(monkeypatch):
    monkeypatch.setattr("shutil.which", lambda _: None)
    assert RustFmt.check_requirements() == ["rustfmt"]
    assert ClangFormat.check_requirements() == ["clang-format"]
    assert check_all_requirements() == ["rustfmt", "clang-format"]


def test_format_invokes_tool(monkeypatch):
    calls = []

    def _run(cmd, **kwargs):
        calls.append(cmd)
        return utils.ProcessResult("", "", 0)

    monkeypatch.setattr(utils, "run_command", _run)
    RustFmt("a.rs").format()
    ClangFormat("a.cc", style="LLVM").format()
    assert calls == [
        ["rustfmt", "--edition", "2021", "a.rs"],
        ["clang-format", "-i", "--style=LLVM", "a.cc"],
    ]


def test_format_failure_raises(monkeypatch):
    monkeypatch.setattr(utils, "run_command", lambda cmd, **kwargs: utils.ProcessResult("", "bad", 1))
    with pytest.raises(OSError, match="a.rs"):
        RustFmt("a.rs").format()
