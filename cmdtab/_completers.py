"""Registry of completion script generators, keyed by shell."""

import argparse
import logging
from typing import Callable, Dict, List, Mapping, Optional, Union

from . import _settings
from ._argparse import command_from_parser
from ._fish import generate_fish_completion
from ._tree import Command

log = logging.getLogger(__name__)

Completer = Callable[[Command], str]
"""Renders a script for a command tree. Returns an empty string when there is
nothing to complete."""

# Registration order; also used as argparse `choices`.
SUPPORTED_SHELLS: List[str] = []
_COMPLETERS: Dict[str, Completer] = {}


def mark_completer(shell: str) -> Callable[[Completer], Completer]:
    """Decorator registering the script generator for `shell`. Re-registering a
    shell replaces its generator."""

    def register(completer: Completer) -> Completer:
        log.debug("register:%s:%r", shell, completer)
        if shell not in _COMPLETERS:
            SUPPORTED_SHELLS.append(shell)
        _COMPLETERS[shell] = completer
        return completer

    return register


def get_completer(shell: str) -> Completer:
    completer = _COMPLETERS.get(shell)
    if completer is None:
        raise NotImplementedError(
            "shell (%s) must be in {%s}" % (shell, ",".join(SUPPORTED_SHELLS))
        )
    return completer


mark_completer("fish")(generate_fish_completion)


def _insert_preamble(script: str, preamble: str) -> str:
    """Place a custom preamble right after the banner comment of a script."""
    if len(script) == 0 or len(preamble) == 0:
        return script
    lines = script.split("\n")
    banner_end = 0
    while banner_end < len(lines) and lines[banner_end].startswith("#"):
        banner_end += 1
    custom = ["", "# Custom Preamble", preamble.rstrip("\n"), "# End Custom Preamble"]
    return "\n".join(lines[:banner_end] + custom + lines[banner_end:])


def complete(
    command: Union[Command, argparse.ArgumentParser],
    shell: Optional[str] = None,
    preamble: Union[str, Mapping[str, str]] = "",
) -> str:
    """Returns a completion script.

    Args:
        command: Command tree to complete. An `argparse.ArgumentParser` is converted
            with `cmdtab.command_from_parser()`.
        shell: Target shell. Defaults to `cmdtab._settings.options["default_shell"]`.
        preamble: Text placed right after the banner of the generated script, or a
            mapping from shell to such text,
            eg `{"fish": "function __mytool_profiles; ls ~/.mytool; end"}`.

    Returns:
        Script as a string. Empty if there is nothing to complete.
    """
    if shell is None:
        shell = _settings.options["default_shell"]
    if isinstance(preamble, Mapping):
        preamble = preamble.get(shell, "")

    completer = get_completer(shell)
    if isinstance(command, argparse.ArgumentParser):
        command = command_from_parser(command)

    log.debug("complete:%s:%s", shell, command.name)
    return _insert_preamble(completer(command), preamble)
