"""Immutable command tree: commands, options, and positional arguments."""

import dataclasses
from typing import Iterator, Optional, Tuple

from ._candidates import CompletionCandidates, NoCandidates


class CommandDefinitionError(ValueError):
    """Raised when a command tree definition can't be loaded or serialized."""


@dataclasses.dataclass(frozen=True)
class Option:
    """A named option, eg `--output/-o`.

    Attributes:
        names: Flag tokens, eg `("--output", "-o")`. Tokens that don't start with a
            dash are kept but never completed.
        secondary_names: Extra tokens, eg `("--no-color",)` for boolean switches.
        hidden: Hidden options are left out of generated scripts.
        arity: Minimum number of values consumed per occurrence.
        help: Description. Only the first line is used for completions.
        completion: Strategy for suggesting values.
    """

    names: Tuple[str, ...]
    secondary_names: Tuple[str, ...] = ()
    hidden: bool = False
    arity: int = 0
    help: str = ""
    completion: CompletionCandidates = NoCandidates()

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", tuple(self.names))
        object.__setattr__(self, "secondary_names", tuple(self.secondary_names))

    def all_names(self) -> Tuple[str, ...]:
        return self.names + self.secondary_names


@dataclasses.dataclass(frozen=True)
class Argument:
    """A positional argument."""

    help: str = ""
    completion: CompletionCandidates = NoCandidates()


@dataclasses.dataclass(frozen=True)
class Command:
    """A node in a command tree.

    Children passed in via `subcommands` are re-created with a `parent_names` chain
    that ends with this command, so a tree built bottom-up is always consistent:

    >>> tree = Command("git", subcommands=[Command("remote", subcommands=[Command("add")])])
    >>> tree.subcommands[0].subcommands[0].parent_names
    ('git', 'remote')
    """

    name: str
    help: str = ""
    options: Tuple[Option, ...] = ()
    arguments: Tuple[Argument, ...] = ()
    subcommands: Tuple["Command", ...] = ()
    parent_names: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        assert len(self.name) > 0, "Command names must be non-empty."
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "arguments", tuple(self.arguments))
        object.__setattr__(self, "parent_names", tuple(self.parent_names))

        names_with_parents = self.names_with_parents()
        object.__setattr__(
            self,
            "subcommands",
            tuple(
                sub
                if sub.parent_names == names_with_parents
                else dataclasses.replace(sub, parent_names=names_with_parents)
                for sub in self.subcommands
            ),
        )

    def names_with_parents(self) -> Tuple[str, ...]:
        """Full name chain, from the root command down to (and including) this one."""
        return self.parent_names + (self.name,)

    def root_name(self) -> str:
        return self.names_with_parents()[0]

    def parent_name(self) -> Optional[str]:
        return self.parent_names[-1] if len(self.parent_names) > 0 else None

    def is_root(self) -> bool:
        return len(self.parent_names) == 0

    def walk(self) -> Iterator["Command"]:
        """Iterate over this command and all of its descendants, in pre-order."""
        yield self
        for sub in self.subcommands:
            yield from sub.walk()
