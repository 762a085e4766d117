"""The `cmdtab` command-line tool."""

import argparse
import dataclasses
import inspect
import logging
import os
import pathlib
import sys
from importlib import import_module
from typing import List, Optional

import termcolor

from . import __version__, _completers, _settings
from ._argparse import command_from_parser
from ._serialization import from_yaml
from ._tree import Command, CommandDefinitionError

log = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def get_main_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdtab",
        description="Generate a shell completion script for a command tree.",
    )
    parser.add_argument(
        "source",
        help="YAML command definition (*.yaml, *.yml), or an importable"
        " `module.attribute` holding a command, a parser, or a function returning one",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )
    parser.add_argument(
        "-s",
        "--shell",
        default=_settings.options["default_shell"],
        choices=_completers.SUPPORTED_SHELLS,
    )
    parser.add_argument("--prog", help="custom program name (overrides the root name)")
    parser.add_argument("--preamble", help="prepended to generated script")
    parser.add_argument(
        "-o", "--output", type=pathlib.Path, help="write to a file instead of stdout"
    )
    parser.add_argument(
        "-u",
        "--error-unimportable",
        default=False,
        action="store_true",
        help="raise errors if `source` is not found in $PYTHONPATH",
    )
    parser.add_argument(
        "--verbose",
        dest="loglevel",
        action="store_const",
        default=logging.INFO,
        const=logging.DEBUG,
        help="Log debug information",
    )
    return parser


class SourceError(Exception):
    """Raised when a command tree source can't be resolved."""


def load_source(source: str, error_unimportable: bool = False) -> Command:
    """Load a command tree from a YAML file or an importable `module.attribute`."""
    if source.endswith(YAML_SUFFIXES):
        path = pathlib.Path(source)
        if not path.is_file():
            raise SourceError(f"no such file: {source}")
        with path.open("r", encoding="utf-8") as f:
            return from_yaml(f)

    if "." not in source:
        raise SourceError(
            f"expected a YAML file or `module.attribute`, but got {source!r}"
        )
    module_name, attribute = source.rsplit(".", 1)
    if sys.path and sys.path[0]:
        # not blank so not searching curdir
        sys.path.insert(1, os.curdir)
    try:
        module = import_module(module_name)
    except ImportError as err:
        if error_unimportable:
            raise
        log.debug(str(err))
        raise SourceError(f"could not import {module_name!r}") from err

    try:
        obj = getattr(module, attribute)
    except AttributeError as err:
        raise SourceError(f"{module_name!r} has no attribute {attribute!r}") from err
    if callable(obj) and not isinstance(obj, (Command, argparse.ArgumentParser)):
        try:
            inspect.signature(obj).bind()
        except TypeError as err:
            raise SourceError(
                f"{source} can't be called without arguments: {err}"
            ) from err
        obj = obj()

    if isinstance(obj, argparse.ArgumentParser):
        return command_from_parser(obj)
    if isinstance(obj, Command):
        return obj
    raise SourceError(
        f"{source} is a {type(obj).__name__}, expected a command or an"
        " argparse.ArgumentParser"
    )


def _print_error(message: str) -> None:
    print(termcolor.colored("error:", "red", attrs=["bold"]), message, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = get_main_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.loglevel)
    log.debug(args)

    try:
        command = load_source(args.source, error_unimportable=args.error_unimportable)
        if args.prog:
            command = dataclasses.replace(command, name=args.prog)
        script = _completers.complete(
            command, shell=args.shell, preamble=args.preamble or ""
        )
    except (SourceError, CommandDefinitionError, NotImplementedError) as e:
        _print_error(str(e))
        return 1

    if len(script) == 0:
        log.info("nothing to complete for %s", command.name)

    if args.output is not None:
        args.output.write_text(script, encoding="utf-8")
        log.info("wrote %s", args.output)
    else:
        sys.stdout.write(script)
    return 0
