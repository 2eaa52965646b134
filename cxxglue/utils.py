import os
import subprocess
from collections import namedtuple
from importlib import resources
from pathlib import Path
from typing import Sequence

import tomli as toml

from cxxglue import logging as cxxglue_logging

logger = cxxglue_logging.get_logger(__name__)

ProcessResult = namedtuple("ProcessResult", ["stdout", "stderr", "returncode"])

_RESOURCE_PACKAGE = "cxxglue._resources"


######## Configuration ########
def _merge_configs(config, default_config):
    config_out = {}

    for key, default_value in default_config.items():
        if key in config:
            if isinstance(config[key], dict) and isinstance(default_value, dict):
                config_out[key] = _merge_configs(config[key], default_value)
            elif isinstance(config[key], dict) or isinstance(default_value, dict):
                raise TypeError(f"Type mismatch for key '{key}': "
                                f"config has {type(config[key])}, default_config has {type(default_value)}")
            # Otherwise, config[key] takes precedence
            else:
                config_out[key] = config[key]
        else:
            config_out[key] = default_value

    # Add keys that are only in config
    for key, value in config.items():
        if key not in default_config:
            config_out[key] = value

    return config_out


def _resource_path(name: str) -> Path:
    return Path(__file__).resolve().parent / "_resources" / name


def load_default_config():
    """Load the bundled default configuration from packaged resources."""
    candidate = _resource_path("cxxglue.default.toml")
    if candidate.is_file():
        with open(candidate, "rb") as f:
            return toml.load(f)

    raise FileNotFoundError("Could not load _resources/cxxglue.default.toml")


def try_load_config(config_file=None):
    """Load user configuration merged with defaults.

    Resolution order:
    1. Explicit `config_file` argument.
    2. `CXXGLUE_CONFIG` environment variable.
    3. `./cxxglue.toml` relative to current working directory.
    If none are found, return the default config alone.
    """
    default_config = load_default_config()

    def _load_user_config(path: Path) -> dict:
        with open(path, "rb") as f:
            return toml.load(f)

    if config_file:
        candidate = Path(config_file).expanduser()
        if not candidate.is_file():
            raise FileNotFoundError(f"Could not find config file {candidate}")
        return _merge_configs(_load_user_config(candidate), default_config)

    env_candidate = os.environ.get("CXXGLUE_CONFIG")
    if env_candidate:
        env_path = Path(env_candidate).expanduser()
        if not env_path.is_file():
            raise FileNotFoundError(f"CXXGLUE_CONFIG={env_candidate} does not point to a readable file")
        return _merge_configs(_load_user_config(env_path), default_config)

    cwd_candidate = Path.cwd() / "cxxglue.toml"
    if cwd_candidate.is_file():
        return _merge_configs(_load_user_config(cwd_candidate), default_config)

    return default_config


######## Resources ########
def read_resource_text(name: str) -> str:
    """Return the text of a file bundled under ``cxxglue/_resources``."""
    try:
        resource = resources.files(_RESOURCE_PACKAGE).joinpath(name)
        with resource.open("r", encoding="utf-8") as handle:
            return handle.read()
    except (FileNotFoundError, ModuleNotFoundError):
        with open(_resource_path(name), "r", encoding="utf-8") as handle:
            return handle.read()


######## Files / processes ########
def read_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def save_code(path, code):
    path_dir = os.path.dirname(path)
    if path_dir:
        os.makedirs(path_dir, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(code)


def run_command(
    cmd: Sequence[str | os.PathLike[str]],
    *,
    capture_output: bool = True,
    timeout: float | None = None,
    cwd: str | os.PathLike[str] | None = None,
    check: bool = False,
) -> ProcessResult:
    completed = subprocess.run(
        cmd,
        stdout=subprocess.PIPE if capture_output else None,
        stderr=subprocess.PIPE if capture_output else None,
        cwd=cwd,
        text=True,
        timeout=timeout,
        check=False,
    )
    stdout = completed.stdout if capture_output and completed.stdout is not None else ""
    stderr = completed.stderr if capture_output and completed.stderr is not None else ""
    result = ProcessResult(stdout, stderr, completed.returncode)
    if check and result.returncode != 0:
        raise subprocess.CalledProcessError(result.returncode, cmd, stdout, stderr)
    return result
