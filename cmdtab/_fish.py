"""Fish completion script generation.

Generated scripts consist of `complete` directives, one per subcommand, option, and
positional argument. Directives are guarded with `-n` conditions so that they only
apply once the right subcommand has been typed:

    # Command completion for git
    # Generated by cmdtab


    ### Setup for git
    set -l git_subcommands 'remote'

    ## Options for git
    complete -c git -n "not __fish_seen_subcommand_from $git_subcommands" -l version


    ### Setup for remote
    complete -c git -f -n __fish_use_subcommand -a remote -d 'Manage remotes'

References:
    - https://fishshell.com/docs/current/completions.html
    - https://fishshell.com/docs/current/cmds/complete.html
"""

import logging
from typing import List

from typing_extensions import assert_never

from . import _settings, _strings
from ._candidates import (
    CompletionCandidates,
    CustomCandidates,
    FixedCandidates,
    HostnameCandidates,
    NoCandidates,
    PathCandidates,
    UsernameCandidates,
)
from ._tree import Command, Option

log = logging.getLogger(__name__)


def is_valid_fish_completion_option(name: str) -> bool:
    return name.startswith("-")


def _completable_names(option: Option) -> List[str]:
    return [
        name for name in option.all_names() if is_valid_fish_completion_option(name)
    ]


def has_fish_completion_requirements(command: Command) -> bool:
    """Returns False when a script for `command` would contain nothing but a banner."""
    return (
        len(command.arguments) > 0
        or len(command.subcommands) > 0
        or any(
            len(_completable_names(option)) > 0
            for option in command.options
            if not option.hidden
        )
    )


def generate_fish_completion(command: Command) -> str:
    """Returns a fish completion script for a command tree.

    Returns an empty string when there is nothing to complete: no positional
    arguments, no subcommands, and no visible option with a dash-prefixed name.
    """
    if not has_fish_completion_requirements(command):
        log.debug("skip:command:%s: nothing to complete", command.name)
        return ""

    lines: List[str] = []
    _append_command(lines, command)
    return "\n".join(lines) + "\n"


def _append_command(lines: List[str], command: Command) -> None:
    """Recursive command tree traversal. Appends lines for `command` and then for each
    of its subcommands."""
    names_with_parents = command.names_with_parents()
    root_name = names_with_parents[0]
    parent_name = command.parent_name()
    is_top_level = parent_name is None
    options = [option for option in command.options if not option.hidden]
    has_subcommands = len(command.subcommands) > 0
    subcommands_var = _strings.subcommands_var_name(names_with_parents)

    log.debug("command:%s", ".".join(names_with_parents))

    if is_top_level:
        lines.append(f"# Command completion for {command.name}")
        lines.append(f"# Generated by {_settings.options['generator_name']}")

    if has_subcommands or not is_top_level:
        lines.extend(["", "", f"### Setup for {command.name}"])

    if has_subcommands:
        subcommands_str = " ".join(sub.name for sub in command.subcommands)
        lines.append(f"set -l {subcommands_var} '{subcommands_str}'")

    if not is_top_level:
        parts = [f"complete -c {root_name} -f"]
        if len(command.parent_names) == 1:
            # Direct child of the root command.
            parts.append("-n __fish_use_subcommand")
        else:
            parent_subcommands_var = _strings.subcommands_var_name(command.parent_names)
            parts.append(
                f'-n "__fish_seen_subcommand_from {parent_name};'
                f' and not __fish_seen_subcommand_from ${parent_subcommands_var}"'
            )
        parts.append(f"-a {command.name}")
        lines.append(" ".join(parts) + _help_fragment(command.help))

    option_lines: List[str] = []
    for option in options:
        names = _completable_names(option)
        if len(names) == 0:
            log.debug("skip:option:%s", option.all_names())
            continue

        line = _complete_call(command, subcommands_var)
        for name in names:
            if name.startswith("--"):
                line += " -l "
            elif len(name) == 2:
                line += " -s "
            else:
                line += " -o "
            line += name.lstrip("-")

        if option.arity > 0:
            line += " -r"

        line += _param_completion_fragment(option.completion)
        line += _help_fragment(option.help)
        option_lines.append(line)

    if len(option_lines) > 0:
        lines.extend(["", f"## Options for {command.name}"])
        lines.extend(option_lines)

    if len(command.arguments) > 0:
        lines.extend(["", f"## Arguments for {command.name}"])

    for argument in command.arguments:
        lines.append(
            _complete_call(command, subcommands_var)
            + _param_completion_fragment(argument.completion)
            + _help_fragment(argument.help)
        )

    for subcommand in command.subcommands:
        log.debug("subcommand:%s", subcommand.name)
        _append_command(lines, subcommand)


def _complete_call(command: Command, subcommands_var: str) -> str:
    """Start of a `complete` directive for an option or argument of `command`."""
    out = f"complete -c {command.root_name()}"
    if command.is_root():
        if len(command.subcommands) > 0:
            out += f' -n "not __fish_seen_subcommand_from ${subcommands_var}"'
    else:
        out += f' -n "__fish_seen_subcommand_from {command.name}"'
    return out


def _help_fragment(help: str) -> str:
    text = _strings.escape_single_quoted(_strings.first_line(help))
    if _strings.is_blank(text):
        return ""
    return f" -d '{text}'"


def _param_completion_fragment(completion: CompletionCandidates) -> str:
    if isinstance(completion, NoCandidates):
        return ""
    elif isinstance(completion, PathCandidates):
        return " -F"
    elif isinstance(completion, HostnameCandidates):
        return ' -fa "(__fish_print_hostnames)"'
    elif isinstance(completion, UsernameCandidates):
        return ' -fa "(__fish_complete_users)"'
    elif isinstance(completion, FixedCandidates):
        values = " ".join(map(_strings.escape_double_quoted, completion.values))
        return f' -fa "{values}"'
    elif isinstance(completion, CustomCandidates):
        return f" -fa {completion.generator('fish')}"
    else:
        assert_never(completion)
