import logging

from .lexer import Lexer
from .machine import Machine


logger = logging.getLogger(__name__)


class Calculator:
    '''
    A machine and a lexer to feed it, one line at a time.
    '''

    def __init__(self, out=None):
        '''
        Create calculator with an empty stack.

        :param out: File-like sink for printed lines; stdout if None.
        '''
        self.machine = Machine(out=out)
        self.lexer = Lexer()

    def process_line(self, line):
        '''
        Normalize line to postfix and run every lexeme on the machine.

        Lexemes run as soon as they are lexed, so printed lines come out in
        the order the operations happen.
        '''
        logger.debug('line %r', line)
        for lexeme in self.lexer.lex(line):
            self.machine.feed(lexeme)
