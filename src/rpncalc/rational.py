'''
Arbitrary-precision rational numbers.

A thin layer over fractions.Fraction adding the calculator's own errors,
truncated (not floored) remainders and a cap on exponents.
'''

from decimal import Decimal
from fractions import Fraction
from functools import total_ordering
from math import isfinite

from .util import ArgumentError, CalcOverflowError, DivideByZeroError


# Repeated multiplication past this exponent is never going to finish.
MAX_EXPONENT = 2 ** 31 - 1


@total_ordering
class Rational:
    '''
    Numerator/denominator pair, always in lowest terms.

    The denominator is always positive, and zero is always 0/1.
    '''

    __slots__ = ('_value',)

    def __init__(self, numerator=0, denominator=1):
        if isinstance(numerator, Fraction) and denominator == 1:
            self._value = numerator
            return
        try:
            self._value = Fraction(int(numerator), int(denominator))
        except ZeroDivisionError as e:
            raise DivideByZeroError() from e

    @classmethod
    def from_mixed(cls, whole, numerator, denominator):
        '''
        Create from whole + numerator/denominator.

        The numerator is expected to carry the whole part's sign already,
        e.g. -1 -1/2 for -3/2.
        '''
        if denominator == 0:
            raise DivideByZeroError()
        return cls(whole * denominator + numerator, denominator)

    @classmethod
    def from_float(cls, value):
        '''
        Create from the exact binary value of a double.
        '''
        if not isfinite(value):
            raise ArgumentError('Argument is not a finite number')
        return cls(Fraction(value))

    @classmethod
    def from_decimal(cls, value):
        '''
        Create from the exact value of a decimal.

        Gives "nice" fractions for values that came from decimal text: 0.1 is
        1/10, not 3602879701896397/36028797018963968.
        '''
        if not isinstance(value, Decimal):
            value = Decimal(value)
        if not value.is_finite():
            raise ArgumentError('Argument is not a finite number')
        return cls(Fraction(value))

    @property
    def numerator(self):
        return self._value.numerator

    @property
    def denominator(self):
        return self._value.denominator

    @property
    def sign(self):
        return (self._value > 0) - (self._value < 0)

    @property
    def whole_part(self):
        '''
        Integral part, truncated toward zero: -3/2 is -1.
        '''
        return int(self._value)

    @property
    def fractional_part(self):
        '''
        What's left after the whole part, with the value's sign: -3/2 is -1/2.
        '''
        return Rational(self._value - int(self._value))

    def invert(self):
        if not self._value:
            raise DivideByZeroError()
        return Rational(1 / self._value)

    def __neg__(self):
        return Rational(-self._value)

    def __pos__(self):
        return self

    def __abs__(self):
        return Rational(abs(self._value))

    def __add__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return Rational(self._value + other._value)

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return Rational(self._value - other._value)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return Rational(other._value - self._value)

    def __mul__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return Rational(self._value * other._value)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return _divide(self._value, other._value)

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return _divide(other._value, self._value)

    def __mod__(self, other):
        '''
        Remainder with the dividend's sign: -7/2 % 1 is -1/2.
        '''
        other = _coerce(other)
        if other is NotImplemented:
            return other
        if not other._value:
            raise DivideByZeroError()
        quotient = int(self._value / other._value)
        return Rational(self._value - quotient * other._value)

    def __pow__(self, exponent):
        if not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0 and not self._value:
            raise ArgumentError('Cannot raise zero to a negative power')
        if abs(exponent) > MAX_EXPONENT:
            if self._value.denominator != 1 or abs(self._value) > 1:
                raise CalcOverflowError('Exponent is too large')
            # Only 0, 1 and -1 get here.
            exponent = 2 - exponent % 2
        return Rational(self._value ** exponent)

    def __float__(self):
        try:
            return float(self._value)
        except OverflowError:
            return float('inf') if self._value > 0 else float('-inf')

    def __int__(self):
        return self.whole_part

    def __bool__(self):
        return bool(self._value)

    def __eq__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self._value == other._value

    def __lt__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self._value < other._value

    def compare(self, other):
        '''
        Return -1, 0 or 1.
        '''
        other = _coerce(other)
        return (self._value > other._value) - (self._value < other._value)

    def __hash__(self):
        return hash(self._value)

    def __str__(self):
        return str(self._value)

    def __repr__(self):
        return 'Rational({}, {})'.format(self.numerator, self.denominator)


def _divide(x, y):
    try:
        return Rational(x / y)
    except ZeroDivisionError as e:
        raise DivideByZeroError() from e


def _coerce(value):
    if isinstance(value, Rational):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Rational(value)
    return NotImplemented
