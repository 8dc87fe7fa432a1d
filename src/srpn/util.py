from functools import wraps
import logging


logger = logging.getLogger(__name__)

# Bounds of a signed 32-bit integer; everything on the stack lives in here.
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


class SRPNError(Exception):
    '''
    Diagnostic raised by a machine operation.

    Never fatal: the machine prints the message and carries on.
    '''
    MESSAGE = None

    def __init__(self, *args):
        super().__init__(*(args or (type(self).MESSAGE,)))


class StackUnderflow(SRPNError):
    MESSAGE = 'Stack underflow.'


class StackEmpty(SRPNError):
    MESSAGE = 'Stack empty.'


class StackOverflow(SRPNError):
    MESSAGE = 'Stack overflow.'


class DivideByZero(SRPNError):
    MESSAGE = 'Divide by 0.'


class NegativePower(SRPNError):
    MESSAGE = 'Negative power.'


class Unrecognised(SRPNError):
    def __init__(self, lexeme):
        super().__init__('Unrecognised operator or operand "{}".'.format(lexeme))


def wrap_user_errors(error):
    '''
    Decorator that converts stray arithmetic exceptions to diagnostics.

    Passes through SRPNErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except SRPNError:
                raise
            except ArithmeticError as e:
                logger.debug('%s in %s: %r', type(e).__name__, f.__name__, e)
                raise error() from e
        return wrapper
    return decorator


def checked(n):
    '''
    Return n if it fits in 32 bits, else None.
    '''
    if INT_MIN <= n <= INT_MAX:
        return n
    return None


def checked_add(left, right):
    return checked(left + right)


def checked_sub(left, right):
    return checked(left - right)


def checked_mul(left, right):
    return checked(left * right)


def checked_div(left, right):
    '''
    Divide, truncating toward zero like C, not flooring like Python.
    '''
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return checked(quotient)


def remainder(left, right):
    '''
    Remainder taking the sign of the dividend; never overflows.
    '''
    result = abs(left) % abs(right)
    return -result if left < 0 else result


def checked_pow(base, exponent):
    '''
    Raise base to a non-negative exponent, or None on overflow.

    Gives up as soon as an intermediate result escapes, so huge exponents
    cost at most 32 multiplications.
    '''
    if base in (0, 1) and exponent:
        return base
    if base == -1:
        return -1 if exponent % 2 else 1
    result = 1
    for _ in range(exponent):
        result = checked(result * base)
        if result is None:
            return None
    return result


def clamp_operand(text):
    '''
    Convert operand text to an integer, saturating at the 32-bit bounds.
    '''
    negative = text.startswith('-')
    # Leading zeros don't count towards int()'s digit limit
    digits = text.lstrip('-').lstrip('0') or '0'
    if len(digits) > len(str(INT_MAX)):
        n = None
    else:
        n = checked(-int(digits) if negative else int(digits))
    if n is None:
        return INT_MIN if negative else INT_MAX
    return n
