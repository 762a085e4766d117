import pytest

import cmdtab
from cmdtab import _settings


@pytest.fixture(scope="function", autouse=True)
def settings():
    """Restore settings modified by a test."""
    original_options = dict(_settings.options)
    yield _settings.options
    _settings.options.update(original_options)  # type: ignore


@pytest.fixture
def git_tree() -> cmdtab.Command:
    """A small tree with two levels of subcommands."""
    return cmdtab.Command(
        "git",
        help="The stupid content tracker.",
        options=[cmdtab.Option(("--version",), help="Print the git suite version.")],
        subcommands=[
            cmdtab.Command(
                "remote",
                help="Manage set of tracked repositories.",
                options=[cmdtab.Option(("--verbose", "-v"))],
                subcommands=[
                    cmdtab.Command(
                        "add",
                        help="Add a remote.",
                        options=[
                            cmdtab.Option(
                                ("-t",),
                                arity=1,
                                help="Branch to track.",
                                completion=cmdtab.CustomCandidates.from_stdout(
                                    "git branch --format='%(refname:short)'"
                                ),
                            )
                        ],
                        arguments=[
                            cmdtab.Argument(help="Remote name."),
                            cmdtab.Argument(
                                help="Remote URL.",
                                completion=cmdtab.HostnameCandidates(),
                            ),
                        ],
                    ),
                    cmdtab.Command("remove", help="Remove a remote."),
                ],
            ),
            cmdtab.Command(
                "clone",
                help="Clone a repository into a new directory.",
                arguments=[cmdtab.Argument(completion=cmdtab.PathCandidates())],
            ),
        ],
    )
