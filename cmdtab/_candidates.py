"""Completion candidates: strategies for suggesting values for options and arguments.

Candidates form a closed set of alternatives. Each alternative is a frozen dataclass,
and generators dispatch on them with an exhaustive `isinstance()` match."""

import dataclasses
from typing import Callable, Mapping, Tuple, Union

from typing_extensions import Literal

ShellType = Literal["bash", "zsh", "fish"]


@dataclasses.dataclass(frozen=True)
class NoCandidates:
    """No value suggestions."""


@dataclasses.dataclass(frozen=True)
class PathCandidates:
    """Suggest filesystem paths."""


@dataclasses.dataclass(frozen=True)
class HostnameCandidates:
    """Suggest known hostnames."""


@dataclasses.dataclass(frozen=True)
class UsernameCandidates:
    """Suggest known usernames."""


@dataclasses.dataclass(frozen=True)
class FixedCandidates:
    """Suggest exactly these literal values, in order."""

    values: Tuple[str, ...]

    def __post_init__(self) -> None:
        # Accept any sequence, but store a tuple so instances stay hashable.
        object.__setattr__(self, "values", tuple(str(v) for v in self.values))


@dataclasses.dataclass(frozen=True)
class StdoutGenerator:
    """Shell expression that completes from the output of a command."""

    command: str

    def __call__(self, shell: ShellType) -> str:
        if shell == "fish":
            return f'"({self.command})"'
        return f'"$({self.command})"'


@dataclasses.dataclass(frozen=True)
class MappingGenerator:
    """Shell expressions looked up by shell type."""

    expressions: Tuple[Tuple[str, str], ...]

    def __call__(self, shell: ShellType) -> str:
        return dict(self.expressions).get(shell, "")


@dataclasses.dataclass(frozen=True)
class CustomCandidates:
    """Suggest values produced by a shell expression.

    `generator` is called with the target shell type, and its return value is embedded
    verbatim in the generated script."""

    generator: Callable[[ShellType], str]

    @staticmethod
    def from_stdout(command: str) -> "CustomCandidates":
        """Complete from the whitespace-separated output of a shell command.

        >>> CustomCandidates.from_stdout("git branch --format='%(refname:short)'")
        """
        return CustomCandidates(StdoutGenerator(command))

    @staticmethod
    def from_mapping(expressions: Mapping[str, str]) -> "CustomCandidates":
        """Use a fixed expression per shell, eg `{"fish": '"(__fish_complete_pids)"'}`.
        Shells missing from the mapping get an empty expression."""
        return CustomCandidates(MappingGenerator(tuple(expressions.items())))


CompletionCandidates = Union[
    NoCandidates,
    PathCandidates,
    HostnameCandidates,
    UsernameCandidates,
    FixedCandidates,
    CustomCandidates,
]

COMPLETION_CANDIDATE_TYPES = (
    NoCandidates,
    PathCandidates,
    HostnameCandidates,
    UsernameCandidates,
    FixedCandidates,
    CustomCandidates,
)


def is_completion_candidates(obj: object) -> bool:
    return isinstance(obj, COMPLETION_CANDIDATE_TYPES)
