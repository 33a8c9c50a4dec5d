from functools import wraps
import math

import regex


class RPNError(Exception):
    pass


class InvalidOperationError(RPNError):
    '''
    Command contract violated: too few arguments, wrong operand types.
    '''


class UnsupportedOperationError(RPNError, ArithmeticError):
    pass


class DivideByZeroError(RPNError, ZeroDivisionError):
    def __init__(self, message='Divide by zero'):
        super().__init__(message)


class NotFiniteNumberError(RPNError, ArithmeticError):
    def __init__(self, message='Result is not a finite number'):
        super().__init__(message)


class CalcOverflowError(RPNError, OverflowError):
    pass


class ArgumentError(RPNError, ValueError):
    pass


class ArgumentOutOfRangeError(ArgumentError):
    pass


class InvalidCastError(ArgumentError):
    pass


class UnknownCommandError(RPNError):
    pass


class CommandStateError(RPNError):
    '''
    A command left its transaction in an impossible state.
    '''


def wrap_user_errors(error, fmt, catch=(OverflowError, ValueError)):
    '''
    Decorator that converts library exceptions to calculator errors.

    Passes through RPNErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except catch as e:
                raise error(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator


INTEGER = regex.compile(r'''
                        \s*
                        (?<sign>[-+])?
                        # Thousands separators go anywhere after the first
                        # digit; group sizes aren't checked.
                        (?<digits>\d[\d,]*)
                        \s*
                        ''', flags=regex.VERBOSE | regex.VERSION1)

DOUBLE = regex.compile(r'''
                       \s*
                       [-+]?
                       (?:
                           \d[\d,]*(?:\.\d*)?
                           |
                           \.\d+
                       )
                       (?:[eE][-+]?\d+)?
                       \s*
                       ''', flags=regex.VERBOSE | regex.VERSION1)

DIGITS = '0123456789ABCDEF'


def try_parse_integer(text):
    '''
    Parse a signed integer, allowing thousands separators.

    Return None if the text isn't one.
    '''
    match = INTEGER.fullmatch(text)
    if match is None:
        return None
    value = int(match.group('digits').replace(',', ''))
    return -value if match.group('sign') == '-' else value


def try_parse_digits(text, base):
    '''
    Parse unsigned digits (case-insensitive) in base 2 to 16.
    '''
    if not text:
        return None
    value = 0
    for ch in text.upper():
        digit = DIGITS.find(ch)
        if digit < 0 or digit >= base:
            return None
        value = value * base + digit
    return value


def try_parse_double(text):
    '''
    Parse a double, allowing thousands separators and an exponent.

    Infinities and NaNs aren't numbers a user can enter.
    '''
    if DOUBLE.fullmatch(text) is None:
        return None
    return float(text.strip().replace(',', ''))


def strip_delimiters(text, start, end):
    '''
    Remove either or both of the enclosing delimiters.

    An unterminated "(1,2" is accepted when it's the last thing entered.
    '''
    if not text:
        return text
    if text[-1] == end:
        text = text[:-1]
    if text and text[0] == start:
        text = text[1:]
    return text


def truncate(value, places=None):
    '''
    Truncate toward zero, optionally at some decimal places.
    '''
    if places is None:
        return math.copysign(math.floor(abs(value)), value) if value else value
    power_of_10 = math.pow(10, places)
    return truncate(value * power_of_10) / power_of_10


def round_half_away(value, places):
    '''
    Round half away from zero at some decimal places.

    Unlike round(), doesn't round half to even.
    '''
    power_of_10 = math.pow(10, places)
    value *= power_of_10
    value += 0.5 if value > 0 else -0.5
    value = math.ceil(value) if value < 0 else math.floor(value)
    return value / power_of_10


def is_really_near_zero(value, epsilon):
    return abs(value) < epsilon


MAX_LONG = 2 ** 63 - 1
MIN_LONG = -2 ** 63


def is_integer(value):
    '''
    Return whether a double is an integer for display purposes.

    Tiny fractional residue (e.g. 10.000000000000002) is ignored, but values
    beyond a 64-bit integer stay doubles so MaxDouble doesn't turn into a 309
    digit integer.
    '''
    if not math.isfinite(value):
        return False
    truncated = truncate(value)
    if truncated == 0:
        return value == 0
    return (is_really_near_zero(value - truncated, 5e-15) and
            abs(value) <= MAX_LONG)


MAX_GCD_ITERATIONS = 100000
DEFAULT_PRECISION = 12


def check_gcd_loop_iterations(iteration):
    '''
    Give up on a GCD loop that isn't converging.
    '''
    if iteration >= MAX_GCD_ITERATIONS:
        raise CalcOverflowError('GCD did not converge')


def gcd_float(x, y):
    '''
    Tolerant Euclid's algorithm over doubles.
    '''
    if x == 0 and y == 0:
        return 1.0
    iteration = 0
    # The loop gets fairly inaccurate for non-integers (e.g. 1821.204, 99).
    while not is_really_near_zero(y, 1e-10):
        x, y = y, math.fmod(x, y)
        check_gcd_loop_iterations(iteration)
        iteration += 1
    return round_half_away(x, DEFAULT_PRECISION)


def truncated_remainder(x, y):
    '''
    Integer remainder taking the sign of the dividend, like C's %.
    '''
    if y == 0:
        raise DivideByZeroError()
    remainder = abs(x) % abs(y)
    return -remainder if x < 0 else remainder


def num_digits(value):
    '''
    Number of decimal digits in an integer's magnitude.
    '''
    return len(str(abs(value)))
