"""Utilities and constants for working with strings."""

import functools
import re
from typing import Sequence

SUBCOMMANDS_VAR_SUFFIX = "_subcommands"


@functools.lru_cache(maxsize=None)
def _get_nonword_pattern() -> re.Pattern:
    return re.compile(r"\W", flags=re.ASCII)


def wordify(string: str) -> str:
    """Replace non-word characters with underscores. `git-lfs` => `git_lfs`."""
    return _get_nonword_pattern().sub("_", string)


def subcommands_var_name(names: Sequence[str]) -> str:
    """Name of the shell variable holding a command's subcommands.

    ('my-tool', 'remote') => 'my_tool_remote_subcommands'
    """
    return "_".join(map(wordify, names)) + SUBCOMMANDS_VAR_SUFFIX


def first_line(text: str) -> str:
    """Text up to (not including) the first line break."""
    return re.split(r"[\r\n]", text, maxsplit=1)[0]


def is_blank(text: str) -> bool:
    return len(text.strip()) == 0


def escape_single_quoted(text: str) -> str:
    """Escape text for use inside a single-quoted fish string, where `\\` and `'`
    are the only escape sequences."""
    return text.replace("\\", "\\\\").replace("'", "\\'")


def escape_double_quoted(text: str) -> str:
    """Escape text for use inside a double-quoted fish string."""
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")


def swap_delimeters(name: str) -> str:
    """Replace underscores with hyphens, except at the start or end of a name.

    `output_dir` => `output-dir`, `_private_` => `_private_`."""
    stripped = name.strip("_")
    if len(stripped) == 0:
        return name
    start = name.index(stripped)
    return name[:start] + stripped.replace("_", "-") + name[start + len(stripped) :]
