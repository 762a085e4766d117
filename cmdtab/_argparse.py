"""Build command trees from `argparse` parsers."""

import argparse
import logging
import pathlib
from typing import Any, Dict, List, Mapping, Optional

from ._candidates import (
    CompletionCandidates,
    CustomCandidates,
    FixedCandidates,
    NoCandidates,
    PathCandidates,
    is_completion_candidates,
)
from ._tree import Argument, Command, Option

log = logging.getLogger(__name__)

# `.complete` strings understood for compatibility with `shtab`.
PATH_COMPLETE_STRINGS = ("file", "directory")


def command_from_parser(
    parser: argparse.ArgumentParser, prog: Optional[str] = None
) -> Command:
    """Convert a parser, including all of its public subparsers, into a command tree.

    Completion candidates for each action are chosen from (in order of precedence):
    - a `.complete` attribute set on the action, eg
      `parser.add_argument("--host").complete = cmdtab.HostnameCandidates()`;
    - the action's `choices`;
    - path-like `type`s (`pathlib.Path`, `argparse.FileType`).

    Args:
        parser: Parser to convert.
        prog: Name of the root command. Defaults to `parser.prog`.

    Returns:
        Root of the command tree.
    """
    return _command_from_parser(
        parser, name=prog or parser.prog, help=parser.description or ""
    )


def _command_from_parser(
    parser: argparse.ArgumentParser, name: str, help: str
) -> Command:
    options: List[Option] = []
    arguments: List[Argument] = []
    subcommands: List[Command] = []

    for optional in parser._get_optional_actions():
        options.append(
            Option(
                names=tuple(optional.option_strings),
                hidden=optional.help == argparse.SUPPRESS,
                arity=_arity_from_nargs(optional.nargs),
                help=_expand_help(optional, parser.prog),
                completion=_completion_from_action(optional),
            )
        )

    for positional in parser._get_positional_actions():
        if positional.help == argparse.SUPPRESS:
            log.debug("skip:positional:%s", positional.dest)
            continue

        if isinstance(positional, argparse._SubParsersAction):
            subcommands.extend(_subcommands_from_action(positional))
        else:
            arguments.append(
                Argument(
                    help=_expand_help(positional, parser.prog),
                    completion=_completion_from_action(positional),
                )
            )

    return Command(
        name=name,
        help=help,
        options=tuple(options),
        arguments=tuple(arguments),
        subcommands=tuple(subcommands),
    )


def _subcommands_from_action(action: argparse._SubParsersAction) -> List[Command]:
    # Help text is only recorded for parsers added with `add_parser(..., help=...)`.
    help_from_name: Dict[str, Optional[str]] = {
        choice_action.dest: choice_action.help
        for choice_action in action._get_subactions()
    }

    out: List[Command] = []
    seen_parsers = set()
    for name, subparser in action.choices.items():
        # Aliases map to the same parser object as the primary name, which comes first.
        if id(subparser) in seen_parsers:
            log.debug("skip:alias:%s", name)
            continue
        seen_parsers.add(id(subparser))

        help = help_from_name.get(name)
        if help == argparse.SUPPRESS:
            log.debug("skip:subcommand:%s", name)
            continue

        log.debug("subcommand:%s", name)
        out.append(
            _command_from_parser(
                subparser, name=name, help=help or subparser.description or ""
            )
        )
    return out


def _arity_from_nargs(nargs: Any) -> int:
    """Minimum number of values an action consumes."""
    if nargs is None:
        return 1
    elif isinstance(nargs, int):
        return nargs
    elif nargs in (argparse.ONE_OR_MORE, argparse.PARSER):
        return 1
    else:
        # OPTIONAL, ZERO_OR_MORE, REMAINDER.
        return 0


def _completion_from_action(action: argparse.Action) -> CompletionCandidates:
    complete = getattr(action, "complete", None)
    if complete is not None:
        if is_completion_candidates(complete):
            return complete
        elif isinstance(complete, Mapping):
            # `shtab`-style mapping from shell to completion function.
            if "fish" in complete:
                return CustomCandidates.from_mapping(complete)
            log.debug("skip:complete:%s: no fish entry", action.dest)
        elif complete in PATH_COMPLETE_STRINGS:
            return PathCandidates()
        else:
            log.debug("skip:complete:%s: %r", action.dest, complete)

    if action.nargs == 0:
        return NoCandidates()

    if action.choices is not None:
        return FixedCandidates(tuple(str(choice) for choice in action.choices))

    if (
        isinstance(action.type, type) and issubclass(action.type, pathlib.PurePath)
    ) or isinstance(action.type, argparse.FileType):
        return PathCandidates()

    return NoCandidates()


def _expand_help(action: argparse.Action, prog: str) -> str:
    """Substitute `%(default)s`-style placeholders, the same way argparse does when
    formatting help messages."""
    if action.help is None or action.help == argparse.SUPPRESS:
        return ""

    params = dict(vars(action), prog=prog)
    for name in list(params):
        if params[name] is argparse.SUPPRESS:
            del params[name]
        elif hasattr(params[name], "__name__"):
            params[name] = params[name].__name__
    if params.get("choices") is not None:
        params["choices"] = ", ".join(map(str, params["choices"]))

    try:
        return action.help % params
    except (KeyError, TypeError, ValueError):
        log.debug("help:%s: could not expand %r", action.dest, action.help)
        return action.help
