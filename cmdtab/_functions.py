"""Build command trees from type-annotated functions.

Parameters without defaults become positional arguments, parameters with defaults
become options. Help text is read from docstrings."""

import collections.abc
import enum
import inspect
import logging
import pathlib
import types
from typing import Any, Callable, Dict, Optional, Sequence, Union

import docstring_parser
from typing_extensions import Annotated, Literal, get_args, get_origin, get_type_hints

from . import _strings
from ._candidates import (
    CompletionCandidates,
    FixedCandidates,
    NoCandidates,
    PathCandidates,
)
from ._tree import Argument, Command, Option

log = logging.getLogger(__name__)

# `X | Y` unions, on Python >= 3.10.
_UNION_TYPE = getattr(types, "UnionType", Union)

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.Set,
)


def command_from_function(
    f: Callable[..., Any],
    name: Optional[str] = None,
    subcommands: Sequence[Command] = (),
) -> Command:
    """Build a command from a function signature.

    Example:

        def clone(repository: str, depth: int = 0, bare: bool = False) -> None:
            '''Clone a repository into a new directory.

            Args:
                repository: Repository to clone from.
                depth: Create a shallow clone with this many commits.
            '''

    maps to a `clone` command with one positional argument and the options
    `--depth` (takes a value) and `--bare/--no-bare` (a switch).

    Args:
        f: Function to read the signature and docstring of.
        name: Command name. Defaults to the function name, with hyphens.
        subcommands: Subcommands to attach.

    Returns:
        The command.
    """
    docstring = docstring_parser.parse(inspect.getdoc(f) or "")
    help_from_param: Dict[str, str] = {
        param.arg_name: param.description or "" for param in docstring.params
    }
    hints = get_type_hints(f, include_extras=True)

    options = []
    arguments = []
    for param in inspect.signature(f).parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            log.debug("skip:param:%s: variadic", param.name)
            continue
        if param.name.startswith("_"):
            log.debug("skip:param:%s: private", param.name)
            continue

        typ = _unwrap(hints.get(param.name, Any))
        help = help_from_param.get(param.name, "")

        if param.default is param.empty:
            arguments.append(Argument(help=help, completion=_completion_from_type(typ)))
            continue

        flag = "--" + _strings.swap_delimeters(param.name)
        if typ is bool:
            options.append(
                Option(
                    names=(flag,),
                    secondary_names=("--no-" + flag[2:],),
                    arity=0,
                    help=help,
                )
            )
        else:
            options.append(
                Option(
                    names=(flag,),
                    arity=1,
                    help=help,
                    completion=_completion_from_type(typ),
                )
            )

    return Command(
        name=name if name is not None else _strings.swap_delimeters(f.__name__),
        help=docstring.short_description or "",
        options=tuple(options),
        arguments=tuple(arguments),
        subcommands=tuple(subcommands),
    )


def _unwrap(typ: Any) -> Any:
    """Strip `Annotated[]` and `Optional[]` wrappers."""
    origin = get_origin(typ)
    if origin is Annotated:
        return _unwrap(get_args(typ)[0])
    if origin is Union or origin is _UNION_TYPE:
        args = [arg for arg in get_args(typ) if arg is not type(None)]
        if len(args) == 1:
            return _unwrap(args[0])
    return typ


def _completion_from_type(typ: Any) -> CompletionCandidates:
    origin = get_origin(typ)
    if origin is Literal:
        return FixedCandidates(tuple(str(choice) for choice in get_args(typ)))
    if origin in _SEQUENCE_ORIGINS:
        args = [arg for arg in get_args(typ) if arg is not Ellipsis]
        if len(args) == 0:
            return NoCandidates()
        return _completion_from_type(_unwrap(args[0]))
    if isinstance(typ, type):
        if issubclass(typ, enum.Enum):
            return FixedCandidates(tuple(member.name for member in typ))
        if issubclass(typ, pathlib.PurePath):
            return PathCandidates()
    return NoCandidates()
