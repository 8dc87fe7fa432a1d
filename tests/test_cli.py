'''
SRPN command line tests
'''

from io import StringIO

from pytest import raises

import srpn.cli
from srpn.cli import CLI, InteractiveInput, _isatty


def test_expressions(capsys):
    CLI().run(args=['-e', '3 4 +', '='])
    assert capsys.readouterr().out.splitlines() == ['7']


def test_expressions_share_machine(capsys):
    CLI().run(args=['-e', '10 0 /', 'd'])
    assert capsys.readouterr().out.splitlines() == ['Divide by 0.', '0', '10']


class TerminalIO(StringIO):
    def fileno(self):
        return 0


def test_stdin(capsys, monkeypatch):
    monkeypatch.setattr(srpn.cli, 'stdin', StringIO('2 3 ^\n=\n'))
    monkeypatch.setattr(srpn.cli, 'isatty', lambda fd: False)
    CLI().run(args=[])
    assert capsys.readouterr().out.splitlines() == ['8']


def test_stdin_without_fileno(capsys, monkeypatch):
    # StringIO has no file descriptor, so can't be a terminal
    monkeypatch.setattr(srpn.cli, 'stdin', StringIO('1 2 + d\n'))
    CLI().run(args=[])
    assert capsys.readouterr().out.splitlines() == ['3']


def test_terminal_is_interactive(monkeypatch):
    monkeypatch.setattr(srpn.cli, 'stdin', TerminalIO())
    monkeypatch.setattr(srpn.cli, 'stdout', TerminalIO())
    monkeypatch.setattr(srpn.cli, 'isatty', lambda fd: True)
    cli = CLI()
    cli.args = cli.argument_parser.parse_args([])
    expressions = cli._prompting_input()
    assert isinstance(expressions, InteractiveInput)
    assert expressions.prompt == CLI.DEFAULT_PROMPT


def test_isatty_without_fileno():
    assert not _isatty(StringIO())
    assert not _isatty(object())


def test_prompt_is_interactive():
    cli = CLI()
    cli.args = cli.argument_parser.parse_args(['-p', '$ '])
    expressions = cli._prompting_input()
    assert isinstance(expressions, InteractiveInput)
    assert expressions.prompt == '$ '


def test_dump(capsys):
    CLI().run(args=['-D', '-e', '3+3 @'])
    assert capsys.readouterr().out.splitlines() == [
        '<kind>\t<repr(lexeme)>',
        "operand\t'3'",
        "operand\t'3'",
        "operator\t'+'",
        "unrecognised\t'@'",
    ]


def test_raw_grammar(capsys):
    CLI().run(args=['-G'])
    out = capsys.readouterr().out
    assert out.startswith('operand:')
    assert 'infix:' in out
    assert 'compound:' in out


def test_exclusive_actions():
    with raises(SystemExit):
        CLI().run(args=['-G', '-D'])


def test_raw_grammar_leaves_stdin_alone(capsys, monkeypatch):
    class Unreadable:
        def fileno(self):
            raise AssertionError('stdin touched')

        def __iter__(self):
            raise AssertionError('stdin read')

    monkeypatch.setattr(srpn.cli, 'stdin', Unreadable())
    CLI().run(args=['-G'])
    assert capsys.readouterr().out.startswith('operand:')
