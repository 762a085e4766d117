"""Settings for cmdtab, read from the environment on import.

Options can also be modified at runtime via `cmdtab._settings.options`; generation
reads them on every call."""

import os

from typing_extensions import TypedDict


class SettingsDict(TypedDict):
    """Options for cmdtab.

    Attributes:
        generator_name: Attribution written into the banner of generated scripts.
        default_shell: Shell used when none is specified.
    """

    generator_name: str
    default_shell: str


def read_option(str_name: str, default: str) -> str:
    value = os.environ.get(str_name, "").strip()
    return value if len(value) > 0 else default


options: SettingsDict = {
    "generator_name": read_option("PYTHON_CMDTAB_GENERATOR_NAME", "cmdtab"),
    "default_shell": read_option("PYTHON_CMDTAB_DEFAULT_SHELL", "fish"),
}
