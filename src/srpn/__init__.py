'''
SRPN calculator.

Saturating 32-bit integer arithmetic on a stack. Takes postfix (Reverse
Polish), infix, and compound assignment (+=, *=, ...) input, all of which
are rewritten to postfix before being run.

Results never overflow: they clamp to the nearest 32-bit bound instead.
'''

from .calculator import Calculator
from .cli import CLI
from .lexer import Lexer
from .machine import Machine


__all__ = 'Machine', 'Lexer', 'Calculator', 'CLI'
