from collections import deque
import logging

import regex

from .util import (INT_MIN, INT_MAX, SRPNError, StackUnderflow, StackEmpty,
                   StackOverflow, DivideByZero, NegativePower, Unrecognised,
                   wrap_user_errors, checked_add, checked_sub, checked_mul,
                   checked_div, checked_pow, remainder, clamp_operand)


logger = logging.getLogger(__name__)


def _saturate(result, positive):
    '''
    Result if it didn't overflow, otherwise the bound it overflowed towards.
    '''
    if result is None:
        return INT_MAX if positive else INT_MIN
    return result


# Binary operators take (left, right), i.e. (second popped, first popped).

def add(left, right):
    return _saturate(checked_add(left, right), right > 0)


def subtract(left, right):
    return _saturate(checked_sub(left, right), left >= 0)


def multiply(left, right):
    return _saturate(checked_mul(left, right), (left < 0) == (right < 0))


def divide(left, right):
    if right == 0:
        raise DivideByZero
    return _saturate(checked_div(left, right), (left < 0) == (right < 0))


@wrap_user_errors(DivideByZero)
def modulo(left, right):
    # The zero check is on the dividend. A zero divisor ends up here too,
    # through the ZeroDivisionError.
    if left == 0:
        raise DivideByZero
    return remainder(left, right)


def power(left, right):
    if right < 0:
        raise NegativePower
    return _saturate(checked_pow(left, right), left > 0 or right % 2 == 0)


class Machine:
    '''
    Saturating 32-bit integer stack machine (SRPN calculator).

    Takes lexemes one at a time and runs them. Diagnostics and printed
    values go, one per line, to the output sink.
    '''

    # Pseudo-random values handed out by r, in order, once each.
    RANDOM = (
        1804289383, 846930886, 1681692777, 1714636915, 1957747793,
        424238335, 719885386, 1649760492, 596516649, 1189641421,
        1025202362, 1350490027, 783368690, 1102520059, 2044897763,
        1967513926, 1365180540, 1540383426, 304089172, 1303455736,
        35005211, 521595368, 1804289383,
    )

    OPERAND = regex.compile(r'-?[0-9]+')

    COMMENT = '#'

    OPERATORS = {
        '+': add,
        '-': subtract,
        '*': multiply,
        '/': divide,
        '%': modulo,
        '^': power,
    }

    def __init__(self, out=None):
        '''
        Create empty stack machine.

        :param out: File-like sink for printed lines; stdout if None.
        '''
        self.stack = deque()
        self.random_index = 0
        self.commenting = False
        self.out = out

    def parse(self, lexeme):
        '''
        Classify lexeme: operand, operator, comment, or one of FUNCTIONS.

        Returns None for blank lexemes and 'unrecognised' for anything else.
        '''
        if not lexeme or lexeme.isspace():
            return None
        elif lexeme == type(self).COMMENT:
            return 'comment'
        elif type(self).OPERAND.fullmatch(lexeme):
            return 'operand'
        elif lexeme in type(self).OPERATORS:
            return 'operator'
        elif lexeme in type(self).FUNCTIONS:
            return type(self).FUNCTIONS[lexeme].__name__
        return 'unrecognised'

    def feed(self, lexeme):
        '''
        Run a single lexeme on the machine.

        Never raises: diagnostics are printed instead.
        '''
        kind = self.parse(lexeme)
        logger.debug('feed %r (%s)', lexeme, kind)
        if kind is None:
            return
        elif kind == 'comment':
            self.commenting = not self.commenting
            return
        elif self.commenting:
            return
        try:
            if kind == 'operand':
                self._pshstack(clamp_operand(lexeme))
            elif kind == 'operator':
                self._apply(type(self).OPERATORS[lexeme])
            elif kind == 'unrecognised':
                raise Unrecognised(lexeme)
            else:
                type(self).FUNCTIONS[lexeme](self)
        except SRPNError as e:
            logger.debug('%s on %r', type(e).__name__, lexeme)
            self.print(e.args[0])

    def _apply(self, operator):
        '''
        Pop two operands, push the result of the operator on them.

        The operands are put back if the operator refuses them.
        '''
        right, left = self._popstack(2)
        try:
            result = operator(left, right)
        except SRPNError:
            self._pshstack(left, right)
            raise
        self._pshstack(result)

    def print(self, *args):
        '''
        Print each arg on its own line to the output sink.
        '''
        print(*args, sep='\n', file=self.out)

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.

        Pops nothing if there aren't enough.
        '''
        if len(self.stack) < n:
            raise StackUnderflow
        return [self.stack.pop() for _ in range(n)]

    def assign(self):
        '''
        Print the element on the top of the stack.
        '''
        if not self.stack:
            raise StackEmpty
        self.print(self.stack[-1])

    def display(self):
        '''
        Print all elements on the stack, top of the stack first.

        An empty stack displays as the smallest integer.
        '''
        if not self.stack:
            self.print(INT_MIN)
        else:
            self.print(*reversed(self.stack))

    def random(self):
        '''
        Push the next pseudo-random value, until they run out.
        '''
        if self.random_index >= len(type(self).RANDOM):
            raise StackOverflow
        self._pshstack(type(self).RANDOM[self.random_index])
        self.random_index += 1

    FUNCTIONS = {
        '=': assign,
        'd': display,
        'r': random,
    }
