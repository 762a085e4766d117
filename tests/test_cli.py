import contextlib
import io
import pathlib
import sys
import textwrap

import pytest

import cmdtab
from cmdtab import _cli

_DEFINITION = textwrap.dedent(
    """\
    name: tool
    options:
      - names: [--host]
        arity: 1
        completion: hostname
    subcommands:
      - name: sub
        help: A subcommand.
    """
)


def _run(argv):
    stdout = io.StringIO()
    stderr = io.StringIO()
    with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
        code = _cli.main(argv)
    return code, stdout.getvalue(), stderr.getvalue()


def test_yaml_source(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "tool.yaml"
    path.write_text(_DEFINITION)

    code, stdout, _ = _run([str(path)])
    assert code == 0
    assert stdout == cmdtab.complete(cmdtab.from_yaml(_DEFINITION), shell="fish")
    assert (
        "complete -c tool -f -n __fish_use_subcommand -a sub -d 'A subcommand.'"
        in stdout
    )


def test_prog_and_output(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "tool.yml"
    path.write_text(_DEFINITION)
    output = tmp_path / "out.fish"

    code, stdout, _ = _run([str(path), "--prog", "renamed", "-o", str(output)])
    assert code == 0
    assert stdout == ""
    script = output.read_text()
    assert "# Command completion for renamed" in script
    assert "complete -c renamed -f -n __fish_use_subcommand -a sub" in script
    assert "tool" not in script


def test_preamble(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "tool.yaml"
    path.write_text(_DEFINITION)
    code, stdout, _ = _run([str(path), "--preamble", "set -l x 1"])
    assert code == 0
    assert "# Custom Preamble\nset -l x 1\n# End Custom Preamble" in stdout


def test_missing_yaml(tmp_path: pathlib.Path) -> None:
    code, stdout, stderr = _run([str(tmp_path / "missing.yaml")])
    assert code == 1
    assert stdout == ""
    assert "no such file" in stderr


def test_malformed_yaml(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "tool.yaml"
    path.write_text("name: tool\ncolor: red\n")
    code, _, stderr = _run([str(path)])
    assert code == 1
    assert "unknown keys" in stderr


def test_unsupported_default_shell(tmp_path: pathlib.Path, settings) -> None:
    path = tmp_path / "tool.yaml"
    path.write_text(_DEFINITION)
    settings["default_shell"] = "tcsh"
    code, _, stderr = _run([str(path)])
    assert code == 1
    assert "must be in" in stderr


def test_unknown_shell_flag(tmp_path: pathlib.Path) -> None:
    with pytest.raises(SystemExit), contextlib.redirect_stderr(io.StringIO()):
        _cli.main([str(tmp_path / "tool.yaml"), "--shell", "tcsh"])


def test_importable_source(
    tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "cmdtab_test_module.py").write_text(
        textwrap.dedent(
            """\
            import argparse

            import cmdtab

            TREE = cmdtab.Command("tree", arguments=[cmdtab.Argument()])


            def get_parser():
                parser = argparse.ArgumentParser(prog="parsed")
                parser.add_argument("--flag", action="store_true")
                return parser


            NOT_A_TREE = 3


            def needs_arguments(prog):
                return argparse.ArgumentParser(prog=prog)
            """
        )
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    code, stdout, _ = _run(["cmdtab_test_module.TREE"])
    assert code == 0
    assert "complete -c tree" in stdout

    code, stdout, _ = _run(["cmdtab_test_module.get_parser"])
    assert code == 0
    assert "complete -c parsed -l flag" in stdout

    code, _, stderr = _run(["cmdtab_test_module.NOT_A_TREE"])
    assert code == 1
    assert "expected a command" in stderr

    code, _, stderr = _run(["cmdtab_test_module.missing"])
    assert code == 1
    assert "has no attribute" in stderr

    code, _, stderr = _run(["cmdtab_test_module.needs_arguments"])
    assert code == 1
    assert "can't be called without arguments" in stderr

    sys.modules.pop("cmdtab_test_module", None)


def test_unimportable_source() -> None:
    code, _, stderr = _run(["cmdtab_no_such_module.parser"])
    assert code == 1
    assert "could not import" in stderr

    with pytest.raises(ImportError):
        _cli.main(["cmdtab_no_such_module.parser", "-u"])


def test_source_without_attribute() -> None:
    code, _, stderr = _run(["justaword"])
    assert code == 1
    assert "module.attribute" in stderr
