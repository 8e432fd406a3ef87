"""partser command line: run a grammar over a file."""

from __future__ import annotations

import dataclasses
import importlib
import importlib.util
import json
import logging
from pathlib import Path
from types import ModuleType
from typing import Any, TextIO

import click

from partser import __version__
from partser.config import PartserConfig, config_for, load_config
from partser.debug import debug, make_handler
from partser.errors import FailureRenderer
from partser.parser import Parser, is_parser

log = logging.getLogger(__name__)


def _import_module(module_ref: str) -> ModuleType:
    if module_ref.endswith(".py"):
        path = Path(module_ref)
        if not path.is_file():
            raise click.BadParameter(f"no such file: {module_ref}", param_hint="GRAMMAR")
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise click.BadParameter(f"cannot load {module_ref}", param_hint="GRAMMAR")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
    try:
        return importlib.import_module(module_ref)
    except ModuleNotFoundError as e:
        raise click.BadParameter(str(e), param_hint="GRAMMAR") from e


def load_grammar(ref: str) -> Parser:
    """Find the parser named by `module:name` or `path/to/file.py:name`."""
    module_ref, sep, name = ref.rpartition(":")
    if not sep or not module_ref or not name:
        raise click.BadParameter(f"expected MODULE:NAME, got {ref!r}", param_hint="GRAMMAR")
    module = _import_module(module_ref)
    grammar = getattr(module, name, None)
    if not is_parser(grammar):
        raise click.BadParameter(f"{name!r} in {module_ref} is not a parser", param_hint="GRAMMAR")
    log.debug("loaded grammar %s from %s", name, module_ref)
    return grammar


def _to_json(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return repr(value)


@click.group()
@click.version_option(__version__, prog_name="partser")
@click.option("--verbose", "-v", is_flag=True, help="Log what partser is doing to stderr.")
def main(verbose: bool) -> None:
    """Run partser grammars from the command line."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command()
@click.argument("grammar")
@click.argument("file", type=click.File("r"), default="-")
@click.option("--env", "env_json", default=None, help="Environment value, as JSON.")
@click.option("--trace", is_flag=True, help="Print every parser evaluation.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to partser.toml (default: nearest one above the working directory).",
)
def parse(
    grammar: str, file: TextIO, env_json: str | None, trace: bool, config_path: Path | None
) -> None:
    """Parse FILE (default: stdin) with GRAMMAR and print the value as JSON."""
    config: PartserConfig = load_config(config_path) if config_path else config_for()
    parser = load_grammar(grammar)

    environment = None
    if env_json is not None:
        try:
            environment = json.loads(env_json)
        except json.JSONDecodeError as e:
            raise click.BadParameter(str(e), param_hint="--env") from e

    if trace:
        parser = debug(
            parser,
            make_handler(
                context=config.trace.context,
                pad_if_short=config.trace.pad_if_short,
                color=config.trace.color,
            ),
        )

    text = file.read()
    name = getattr(file, "name", "<stdin>")
    log.debug("parsing %d characters from %s", len(text), name)
    result = parser(text, environment)

    if not result.status:
        renderer = FailureRenderer(color=config.errors.color, context=config.errors.context)
        click.echo(renderer.render(text, result, name), err=True)
        raise SystemExit(1)

    click.echo(json.dumps(result.value, default=_to_json, ensure_ascii=False))
