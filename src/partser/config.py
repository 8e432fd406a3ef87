"""TOML config loading for partser.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger(__name__)

CONFIG_NAME = "partser.toml"


@dataclass
class TraceConfig:
    context: int = 10
    pad_if_short: bool = False
    color: bool | None = None  # None: let click decide from the terminal


@dataclass
class ErrorsConfig:
    context: int = 10
    color: bool = True


@dataclass
class PartserConfig:
    trace: TraceConfig = field(default_factory=TraceConfig)
    errors: ErrorsConfig = field(default_factory=ErrorsConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Return the nearest partser.toml at or above `start_path` (default: cwd).

    A file path starts the search in its directory. Raises FileNotFoundError
    when no directory up to the root has one.
    """
    start = (start_path or Path.cwd()).resolve()
    directory = start.parent if start.is_file() else start
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_NAME
        if candidate.is_file():
            log.debug("using %s for %s", candidate, start)
            return candidate
    raise FileNotFoundError(f"no {CONFIG_NAME} at or above {directory}")


def load_config(path: Path) -> PartserConfig:
    """Parse a partser.toml file into a PartserConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)
    log.debug("loaded config from %s", path)

    config = PartserConfig()

    if "trace" in data:
        trc = data["trace"]
        config.trace = TraceConfig(
            context=trc.get("context", 10),
            pad_if_short=trc.get("pad_if_short", False),
            color=trc.get("color"),
        )

    if "errors" in data:
        err = data["errors"]
        config.errors = ErrorsConfig(
            context=err.get("context", 10),
            color=err.get("color", True),
        )

    return config


def config_for(start_path: Path | None = None) -> PartserConfig:
    """Load the nearest partser.toml, or the defaults if there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        log.debug("no %s found, using defaults", CONFIG_NAME)
        return PartserConfig()
