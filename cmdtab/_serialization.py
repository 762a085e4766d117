"""Human-readable YAML definitions for command trees.

Example definition:

    name: backup
    help: Back up directories to remote hosts.
    options:
      - names: [--verbose, -v]
        help: Print more output.
    subcommands:
      - name: push
        options:
          - names: [--host]
            arity: 1
            completion: hostname
        arguments:
          - help: Directory to back up.
            completion: path
      - name: prune
        options:
          - names: [--keep]
            arity: 1
            completion: {fixed: [daily, weekly, monthly]}

Completion kinds: `none`, `path`, `hostname`, `username`, `{fixed: [...]}`,
`{stdout: <command>}`, and `{custom: {<shell>: <expression>}}`.
"""

import logging
from typing import IO, Any, Dict, List, Mapping, Sequence, Tuple, Union

import yaml

from ._candidates import (
    CompletionCandidates,
    CustomCandidates,
    FixedCandidates,
    HostnameCandidates,
    MappingGenerator,
    NoCandidates,
    PathCandidates,
    StdoutGenerator,
    UsernameCandidates,
)
from ._tree import Argument, Command, CommandDefinitionError, Option

log = logging.getLogger(__name__)

_COMMAND_KEYS = ("name", "help", "options", "arguments", "subcommands")
_OPTION_KEYS = ("names", "secondary_names", "help", "arity", "hidden", "completion")
_ARGUMENT_KEYS = ("help", "completion")

_SIMPLE_CANDIDATES = {
    "none": NoCandidates(),
    "path": PathCandidates(),
    "hostname": HostnameCandidates(),
    "username": UsernameCandidates(),
}


def from_yaml(stream: Union[str, IO[str], bytes, IO[bytes]]) -> Command:
    """Load a command tree from a YAML definition.

    Args:
        stream: YAML to read from.

    Returns:
        Root of the command tree.

    Raises:
        CommandDefinitionError: If the definition is malformed.
    """
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise CommandDefinitionError(f"Could not parse command definition: {e}") from e
    return _command_from_dict(data, path="")


def to_yaml(command: Command) -> str:
    """Serialize a command tree to YAML. Inverse of `from_yaml()`.

    Raises:
        CommandDefinitionError: If the tree contains custom candidates with an
            arbitrary generator function, which can't be serialized.
    """
    return yaml.safe_dump(
        _dict_from_command(command, path=command.name),
        sort_keys=False,
        default_flow_style=False,
    )


def _expect_mapping(data: Any, path: str, keys: Sequence[str]) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise CommandDefinitionError(
            f"{path or '<root>'}: expected a mapping, but got {type(data).__name__}"
        )
    unknown = [key for key in data.keys() if key not in keys]
    if len(unknown) > 0:
        raise CommandDefinitionError(
            f"{path or '<root>'}: unknown keys {unknown}, expected a subset of"
            f" {list(keys)}"
        )
    return data


def _expect_list(data: Any, path: str) -> List[Any]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise CommandDefinitionError(
            f"{path}: expected a list, but got {type(data).__name__}"
        )
    return data


def _expect_str(data: Any, path: str) -> str:
    if data is None:
        return ""
    if not isinstance(data, str):
        raise CommandDefinitionError(
            f"{path}: expected a string, but got {type(data).__name__}"
        )
    return data


def _expect_names(data: Any, path: str) -> Tuple[str, ...]:
    names = _expect_list(data, path)
    for i, name in enumerate(names):
        if not isinstance(name, str) or len(name) == 0:
            raise CommandDefinitionError(
                f"{path}[{i}]: expected a non-empty string, but got {name!r}"
            )
    return tuple(names)


def _command_from_dict(data: Any, path: str, parent_path: str = "") -> Command:
    """`path` locates the definition before its name is known; once read, nested
    paths are built from names, eg `backup.push.options[0]`."""
    data = _expect_mapping(data, path, _COMMAND_KEYS)
    name = data.get("name")
    if not isinstance(name, str) or len(name) == 0:
        raise CommandDefinitionError(
            f"{path or '<root>'}: every command needs a non-empty `name`"
        )
    path = f"{parent_path}.{name}" if parent_path else name
    log.debug("load:command:%s", path)

    return Command(
        name=name,
        help=_expect_str(data.get("help"), f"{path}.help"),
        options=tuple(
            _option_from_dict(option, f"{path}.options[{i}]")
            for i, option in enumerate(
                _expect_list(data.get("options"), f"{path}.options")
            )
        ),
        arguments=tuple(
            _argument_from_dict(argument, f"{path}.arguments[{i}]")
            for i, argument in enumerate(
                _expect_list(data.get("arguments"), f"{path}.arguments")
            )
        ),
        subcommands=tuple(
            _command_from_dict(sub, f"{path}.subcommands[{i}]", parent_path=path)
            for i, sub in enumerate(
                _expect_list(data.get("subcommands"), f"{path}.subcommands")
            )
        ),
    )


def _option_from_dict(data: Any, path: str) -> Option:
    data = _expect_mapping(data, path, _OPTION_KEYS)
    names = _expect_names(data.get("names"), f"{path}.names")
    secondary_names = _expect_names(
        data.get("secondary_names"), f"{path}.secondary_names"
    )
    arity = data.get("arity", 0)
    if not isinstance(arity, int) or isinstance(arity, bool) or arity < 0:
        raise CommandDefinitionError(
            f"{path}.arity: expected a non-negative integer, but got {arity!r}"
        )
    hidden = data.get("hidden", False)
    if not isinstance(hidden, bool):
        raise CommandDefinitionError(
            f"{path}.hidden: expected a boolean, but got {hidden!r}"
        )

    return Option(
        names=names,
        secondary_names=secondary_names,
        hidden=hidden,
        arity=arity,
        help=_expect_str(data.get("help"), f"{path}.help"),
        completion=_candidates_from_data(data.get("completion"), f"{path}.completion"),
    )


def _argument_from_dict(data: Any, path: str) -> Argument:
    data = _expect_mapping(data, path, _ARGUMENT_KEYS)
    return Argument(
        help=_expect_str(data.get("help"), f"{path}.help"),
        completion=_candidates_from_data(data.get("completion"), f"{path}.completion"),
    )


def _candidates_from_data(data: Any, path: str) -> CompletionCandidates:
    if data is None:
        return NoCandidates()

    if isinstance(data, str):
        if data not in _SIMPLE_CANDIDATES:
            raise CommandDefinitionError(
                f"{path}: unknown completion kind {data!r}, expected one of"
                f" {list(_SIMPLE_CANDIDATES)} or a mapping with a `fixed`, `stdout`,"
                " or `custom` key"
            )
        return _SIMPLE_CANDIDATES[data]

    data = _expect_mapping(data, path, ("fixed", "stdout", "custom"))
    if len(data) != 1:
        raise CommandDefinitionError(
            f"{path}: expected exactly one completion kind, but got {list(data)}"
        )
    ((kind, value),) = data.items()
    if kind == "fixed":
        return FixedCandidates(
            tuple(str(v) for v in _expect_list(value, f"{path}.fixed"))
        )
    elif kind == "stdout":
        return CustomCandidates.from_stdout(_expect_str(value, f"{path}.stdout"))
    else:
        assert kind == "custom"
        if not isinstance(value, Mapping):
            raise CommandDefinitionError(
                f"{path}.custom: expected a mapping from shell to expression"
            )
        return CustomCandidates.from_mapping(
            {
                str(shell): _expect_str(expression, f"{path}.custom.{shell}")
                for shell, expression in value.items()
            }
        )


def _dict_from_command(command: Command, path: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {"name": command.name}
    if command.help:
        out["help"] = command.help
    if len(command.options) > 0:
        out["options"] = [
            _dict_from_option(option, f"{path}.options[{i}]")
            for i, option in enumerate(command.options)
        ]
    if len(command.arguments) > 0:
        out["arguments"] = []
        for i, argument in enumerate(command.arguments):
            argument_dict: Dict[str, Any] = {}
            if argument.help:
                argument_dict["help"] = argument.help
            if not isinstance(argument.completion, NoCandidates):
                argument_dict["completion"] = _data_from_candidates(
                    argument.completion, f"{path}.arguments[{i}]"
                )
            out["arguments"].append(argument_dict)
    if len(command.subcommands) > 0:
        out["subcommands"] = [
            _dict_from_command(sub, f"{path}.{sub.name}") for sub in command.subcommands
        ]
    return out


def _dict_from_option(option: Option, path: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {"names": list(option.names)}
    if len(option.secondary_names) > 0:
        out["secondary_names"] = list(option.secondary_names)
    if option.help:
        out["help"] = option.help
    if option.arity != 0:
        out["arity"] = option.arity
    if option.hidden:
        out["hidden"] = True
    if not isinstance(option.completion, NoCandidates):
        out["completion"] = _data_from_candidates(option.completion, path)
    return out


def _data_from_candidates(completion: CompletionCandidates, path: str) -> Any:
    for kind, candidates in _SIMPLE_CANDIDATES.items():
        if completion == candidates:
            return kind
    if isinstance(completion, FixedCandidates):
        return {"fixed": list(completion.values)}
    assert isinstance(completion, CustomCandidates)
    generator = completion.generator
    if isinstance(generator, StdoutGenerator):
        return {"stdout": generator.command}
    if isinstance(generator, MappingGenerator):
        return {"custom": dict(generator.expressions)}
    raise CommandDefinitionError(
        f"{path}: custom completions can only be serialized when built with"
        " `CustomCandidates.from_stdout()` or `CustomCandidates.from_mapping()`"
    )
