"""argparse integration: a flag that prints a completion script and exits."""

import argparse
import functools
import sys
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from . import _completers, _settings


class PrintCompletionAction(argparse.Action):
    """Prints the completion script for the selected shell, then exits.

    `parent` is the parser to complete. When omitted, the parser the action was
    added to is used."""

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        parent: Optional[argparse.ArgumentParser] = None,
        preamble: Union[str, Mapping[str, str]] = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(option_strings, dest, **kwargs)
        self.parent = parent
        self.preamble = preamble

    def __call__(self, parser, namespace, values, option_string=None):
        target = self.parent if self.parent is not None else parser
        sys.stdout.write(_completers.complete(target, values, preamble=self.preamble))
        parser.exit(0)


def completion_action(
    parent: Optional[argparse.ArgumentParser] = None,
    preamble: Union[str, Mapping[str, str]] = "",
) -> Callable[..., argparse.Action]:
    """Action for `parser.add_argument(..., action=...)` that prints a script."""
    return functools.partial(PrintCompletionAction, parent=parent, preamble=preamble)


def add_argument_to(
    parser: argparse.ArgumentParser,
    option_string: Union[str, Sequence[str]] = "--print-completion",
    help: str = "print shell completion script",
    parent: Optional[argparse.ArgumentParser] = None,
    preamble: Union[str, Mapping[str, str]] = "",
) -> argparse.ArgumentParser:
    """Add an argument that prints a completion script for `parser`.

    Args:
        parser: Parser to add the argument to.
        option_string: Flag(s) for the argument. If positional (no `-` prefix), then
            `parser` is assumed to actually be a subparser (subcommand mode), eg
            `mytool completion fish`.
        help: Help text for the argument.
        parent: Parser to generate completions for. Required in subcommand mode.
        preamble: Text, or mapping from shell to text, placed after the banner of the
            generated script.

    Returns:
        `parser`, for chaining.
    """
    option_strings: List[str] = (
        [option_string] if isinstance(option_string, str) else list(option_string)
    )
    positional = not option_strings[0].startswith("-")
    if positional:
        assert parent is not None, "subcommand mode: parent required"
        parser.add_argument(
            *option_strings,
            action=PrintCompletionAction,
            parent=parent,
            preamble=preamble,
            nargs="?",
            default=_settings.options["default_shell"],
            choices=_completers.SUPPORTED_SHELLS,
            help=help,
        )
    else:
        parser.add_argument(
            *option_strings,
            action=PrintCompletionAction,
            parent=parent,
            preamble=preamble,
            metavar="SHELL",
            choices=_completers.SUPPORTED_SHELLS,
            help=help,
        )
    return parser
