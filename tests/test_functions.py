"""Tests for building command trees from annotated functions."""

import enum
import pathlib
from typing import List, Optional, Tuple

from typing_extensions import Annotated, Literal

import cmdtab


class Color(enum.Enum):
    RED = enum.auto()
    GREEN = enum.auto()


def clone(
    repository: str,
    directory: Optional[pathlib.Path] = None,
    depth: int = 0,
    bare: bool = False,
    branch_mode: Literal["single", "all"] = "all",
    color: Color = Color.RED,
    config_files: Tuple[pathlib.Path, ...] = (),
    tags: Annotated[List[str], "metadata"] = [],
    _internal: int = 0,
    *args: str,
    **kwargs: str,
) -> None:
    """Clone a repository into a new directory.

    Longer description that is not used.

    Args:
        repository: Repository to clone from.
        directory: Where to clone to.
        depth: Create a shallow clone with this many commits.
        bare: Make a bare repository.
    """


def test_command_from_function() -> None:
    command = cmdtab.command_from_function(clone)
    assert command.name == "clone"
    assert command.help == "Clone a repository into a new directory."

    (repository,) = command.arguments
    assert repository.help == "Repository to clone from."
    assert repository.completion == cmdtab.NoCandidates()

    assert [option.names for option in command.options] == [
        ("--directory",),
        ("--depth",),
        ("--bare",),
        ("--branch-mode",),
        ("--color",),
        ("--config-files",),
        ("--tags",),
    ]
    directory, depth, bare, branch_mode, color, config_files, tags = command.options

    assert directory.completion == cmdtab.PathCandidates()
    assert directory.arity == 1
    assert directory.help == "Where to clone to."

    assert depth.completion == cmdtab.NoCandidates()
    assert depth.arity == 1

    assert bare.arity == 0
    assert bare.secondary_names == ("--no-bare",)
    assert bare.help == "Make a bare repository."

    assert branch_mode.completion == cmdtab.FixedCandidates(("single", "all"))
    assert branch_mode.help == ""
    assert color.completion == cmdtab.FixedCandidates(("RED", "GREEN"))
    assert config_files.completion == cmdtab.PathCandidates()
    assert tags.completion == cmdtab.NoCandidates()


def test_name_and_subcommands() -> None:
    def remote_add(name: str) -> None:
        """Add a remote."""

    def remote() -> None:
        pass

    command = cmdtab.command_from_function(
        remote,
        name="remote",
        subcommands=[cmdtab.command_from_function(remote_add)],
    )
    assert command.help == ""
    (add,) = command.subcommands
    assert add.name == "remote-add"
    assert add.parent_names == ("remote",)
    assert add.help == "Add a remote."


def test_script_from_function() -> None:
    script = cmdtab.generate_fish_completion(cmdtab.command_from_function(clone))
    assert "complete -c clone -l bare -l no-bare -d 'Make a bare repository.'" in script
    assert 'complete -c clone -l branch-mode -r -fa "single all"' in script
    assert "complete -c clone -d 'Repository to clone from.'" in script
