from io import UnsupportedOperation
from os import isatty
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession

from .calculator import Calculator
from .machine import Machine
from .lexer import Lexer


def _isatty(stream):
    '''
    Return True if stream is a terminal; streams without a file descriptor
    (pipe wrappers, captured output) never are.
    '''
    try:
        return isatty(stream.fileno())
    except (AttributeError, UnsupportedOperation):
        return False


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    # Persistent
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to SRPN calculator.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump all lexemes, in postfix order, and what the machine takes them for.
        '''
        machine = Machine()
        lexer = Lexer()
        print('<kind>\t<repr(lexeme)>')
        for line in self.args.expressions:
            for lexeme in lexer.lex(line):
                print(machine.parse(lexeme),
                      repr(lexeme),
                      sep='\t')

    def executor(self):
        '''
        Run calculator.
        '''
        calculator = Calculator()
        for line in self.args.expressions:
            calculator.process_line(line)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        for name, pattern in lexer.grammar().items():
            print(name, pattern.strip(), sep=':\n')

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           _isatty(stdin) and _isatty(stdout):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='SRPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log lexing and evaluation '
                                               'to stderr')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(stream=stderr,
                            level=logging.DEBUG if self.args.verbose
                                  else logging.WARNING,
                            format='%(name)s: %(message)s')
        # The grammar needs no input, so leave stdin alone
        if self.args.action != self.raw_grammar and \
           self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
