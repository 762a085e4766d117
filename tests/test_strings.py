from cmdtab import _strings


def test_wordify():
    assert _strings.wordify("git") == "git"
    assert _strings.wordify("git-lfs") == "git_lfs"
    assert _strings.wordify("a.b c:d") == "a_b_c_d"
    assert _strings.wordify("ünïcode") == "_n_code"


def test_subcommands_var_name():
    assert _strings.subcommands_var_name(["git"]) == "git_subcommands"
    assert (
        _strings.subcommands_var_name(("my-tool", "remote.add"))
        == "my_tool_remote_add_subcommands"
    )


def test_first_line():
    assert _strings.first_line("hello") == "hello"
    assert _strings.first_line("hello\nworld") == "hello"
    assert _strings.first_line("hello\r\nworld") == "hello"
    assert _strings.first_line("\nworld") == ""
    assert _strings.first_line("") == ""


def test_is_blank():
    assert _strings.is_blank("")
    assert _strings.is_blank(" \t ")
    assert not _strings.is_blank(" x ")


def test_escape_single_quoted():
    assert _strings.escape_single_quoted("It's") == "It\\'s"
    assert _strings.escape_single_quoted("''") == "\\'\\'"
    assert _strings.escape_single_quoted('say "hi"') == 'say "hi"'
    assert _strings.escape_single_quoted("C:\\") == "C:\\\\"
    assert _strings.escape_single_quoted("a\\'b") == "a\\\\\\'b"


def test_escape_double_quoted():
    assert _strings.escape_double_quoted('say "hi"') == 'say \\"hi\\"'
    assert _strings.escape_double_quoted("$HOME") == "\\$HOME"
    assert _strings.escape_double_quoted("a\\b") == "a\\\\b"
    assert _strings.escape_double_quoted("it's") == "it's"


def test_swap_delimeters():
    assert _strings.swap_delimeters("output_dir") == "output-dir"
    assert _strings.swap_delimeters("_private_name_") == "_private-name_"
    assert _strings.swap_delimeters("___") == "___"
    assert _strings.swap_delimeters("plain") == "plain"
