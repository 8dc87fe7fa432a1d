from functools import reduce
import logging
import operator

import regex

from .machine import Machine


logger = logging.getLogger(__name__)


class Lexer:
    '''
    Normalizer for the SRPN grammar: postfix, infix, and compound assignment.

    Rewrites the text of a line until it is all postfix, yielding atomic
    lexemes in evaluation order. For consistency, needs to be
    instantiated, despite holding no internal state.
    '''
    # Optionally negative run of digits: 3, -3, 0042
    OPERAND = r'''
               -?
               [0-9]+
               '''
    # Single operator directly followed by an operand: +3, *-3
    # Division is not eligible; / always stands alone.
    INFIX = r'''
             (?<operator>
                 [-+*%^]
             )
             (?<operand>
                 {OPERAND}
             )
             '''.format(OPERAND=OPERAND)
    # Run of operators: +, -*, //
    OPERATORS = r'''
                 [-+*/%^]+
                 '''
    # Any run of operators ending in assignment: +=, -+=, //=
    COMPOUND = r'''
                (?<operators>
                    {OPERATORS}
                )
                =
                '''.format(OPERATORS=OPERATORS)

    assert set('-+*/%^') == set(Machine.OPERATORS)

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    _OPERAND = regex.compile(OPERAND, FLAGS)
    _INFIX = regex.compile(INFIX, FLAGS)
    _OPERATORS = regex.compile(OPERATORS, FLAGS)
    _COMPOUND = regex.compile(COMPOUND, FLAGS)

    ASSIGN = '='

    def skip(self, line, pos):
        '''
        Return position of the next non-space character in line, or its end.
        '''
        while pos < len(line) and line[pos].isspace():
            pos += 1
        return pos

    def lex(self, line):
        '''
        Take a line and yield all lexemes, in postfix order.

        Operands win over infix, infix over compound assignment; anything
        else is a single character lexeme, recognised or not. Only the
        rewrites copy the rest of the line; everything else moves along it.
        '''
        pos = self.skip(line, 0)
        # Operators before here can't start a compound assignment
        bare = 0
        while pos < len(line):
            operand = type(self)._OPERAND.match(line, pos)
            if operand:
                yield operand.group(0)
                pos = self.skip(line, operand.end())
                continue
            infix = type(self)._INFIX.match(line, pos)
            if infix:
                # +3 rest -> 3+ rest; the operand comes out next time round
                line = infix.group('operand') + infix.group('operator') + \
                       line[infix.end():]
                logger.debug('infix rewritten to %r', line)
                pos = bare = 0
                continue
            compound = None
            if pos >= bare:
                compound = type(self)._COMPOUND.match(line, pos)
            if compound:
                # += rest -> = then rest+
                yield type(self).ASSIGN
                line = line[compound.end():] + compound.group('operators')
                logger.debug('compound assignment rewritten to %r', line)
                pos = self.skip(line, 0)
                bare = 0
                continue
            if pos >= bare:
                # No = after this run, so none after any of its tails either
                run = type(self)._OPERATORS.match(line, pos)
                bare = run.end() if run else pos
            yield line[pos]
            pos = self.skip(line, pos + 1)

    def grammar(self):
        '''
        Return the regular expressions tried on each lexeme, in order.
        '''
        return {'operand': type(self).OPERAND,
                'infix': type(self).INFIX,
                'compound': type(self).COMPOUND}
