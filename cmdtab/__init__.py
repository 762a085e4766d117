"""Shell completion scripts for command trees.

Command trees can be built directly, from `argparse` parsers, from annotated
functions, or from YAML definitions:

    import cmdtab

    tree = cmdtab.Command(
        "backup",
        options=[cmdtab.Option(("--host",), arity=1, completion=cmdtab.HostnameCandidates())],
        subcommands=[cmdtab.Command("prune", help="Remove old snapshots.")],
    )
    print(cmdtab.complete(tree, shell="fish"))
"""

__version__ = "0.1.0"

from ._actions import add_argument_to, completion_action
from ._argparse import command_from_parser
from ._candidates import (
    CompletionCandidates,
    CustomCandidates,
    FixedCandidates,
    HostnameCandidates,
    NoCandidates,
    PathCandidates,
    ShellType,
    UsernameCandidates,
)
from ._completers import SUPPORTED_SHELLS, complete, get_completer
from ._fish import generate_fish_completion
from ._functions import command_from_function
from ._serialization import from_yaml, to_yaml
from ._tree import Argument, Command, CommandDefinitionError, Option

__all__ = [
    "add_argument_to",
    "completion_action",
    "command_from_parser",
    "command_from_function",
    "complete",
    "get_completer",
    "generate_fish_completion",
    "from_yaml",
    "to_yaml",
    "SUPPORTED_SHELLS",
    "Argument",
    "Command",
    "CommandDefinitionError",
    "Option",
    "CompletionCandidates",
    "CustomCandidates",
    "FixedCandidates",
    "HostnameCandidates",
    "NoCandidates",
    "PathCandidates",
    "ShellType",
    "UsernameCandidates",
]
