'''
Arithmetic, rounding, combinatorial and transcendental commands.
'''

import cmath
import math
import random

from .. import operations
from ..numeric import BinaryValue, ComplexValue, DoubleValue, IntegerValue
from ..util import ArgumentOutOfRangeError, NotFiniteNumberError, \
    is_really_near_zero, round_half_away, truncate
from ..value import ValueType
from .base import Commands


ONE_HUNDRED = IntegerValue(100)

# Trig results this close to zero or this large are rounding noise.
TRIG_NEAR_ZERO = 1e-14
TRIG_NEAR_OVERFLOW = 1e15


def _normalize_trig(value):
    if is_really_near_zero(value, TRIG_NEAR_ZERO):
        return 0.0
    elif value > TRIG_NEAR_OVERFLOW:
        return math.inf
    elif value < -TRIG_NEAR_OVERFLOW:
        return -math.inf
    return value


def _real(operation, value):
    '''
    Apply a math function, turning domain and range errors into nan and inf.

    Committing either is rejected as not a finite number.
    '''
    try:
        return operation(value)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def _transcendental(value, complex_operation, double_operation,
                    integer_operation=None):
    '''
    Apply whichever operation suits the value's type.
    '''
    if integer_operation is not None and \
       value.value_type in (ValueType.INTEGER, ValueType.BINARY):
        return DoubleValue(_real(integer_operation, value.to_integer()))
    elif value.value_type is not ValueType.COMPLEX:
        return DoubleValue(_real(double_operation, value.to_double()))
    try:
        return ComplexValue(complex_operation(value.to_complex()))
    except (ValueError, OverflowError) as e:
        raise NotFiniteNumberError() from e


class MathCommands(Commands):

    def __init__(self, calculator):
        super().__init__(calculator)
        self.randomizer = random.Random()

    def use_top_scalar_numeric_value(self, command):
        self.require_args(1)
        self.require_scalar_numeric_type(0)
        return command.use_top_value()

    def use_top_numeric_value(self, command):
        self.require_args(1)
        self.require_complex_numeric_type(0)
        return command.use_top_value()

    def use_top_two_numeric_values(self, command):
        '''
        Return the top two numeric values, top first.
        '''
        self.require_args(2)
        self.require_complex_numeric_type(0)
        self.require_complex_numeric_type(1)
        return command.use_top_values(2)

    def use_top_two_scalar_numeric_values(self, command):
        values = self.use_top_two_numeric_values(command)
        self.require_scalar_numeric_type(0)
        self.require_scalar_numeric_type(1)
        return values

    def to_radians(self, angle):
        return self.settings.to_radians(angle)

    def from_radians(self, radians):
        return self.settings.from_radians(radians)

    def _transcendental_command(self, command, complex_operation,
                                double_operation, integer_operation=None):
        value = self.use_top_numeric_value(command)
        command.commit(_transcendental(value, complex_operation,
                                       double_operation, integer_operation))

    def _binary_operation(self, command, operation):
        '''
        Commit second op top.
        '''
        self.require_args(2)
        x, y = command.use_top_values(2)
        command.commit(operation(y, x, self.settings))

    def abs(self, command):
        self.require_args(1)
        self.require_complex_numeric_type_or(0, ValueType.TIMESPAN)
        value = command.use_top_value()
        command.commit(operations.abs_value(value, self.settings))

    def acos(self, command):
        self._transcendental_command(
            command, cmath.acos,
            lambda x: _normalize_trig(self.from_radians(math.acos(x))))

    def add(self, command):
        self._binary_operation(command, operations.add)

    def alog(self, command):
        self._transcendental_command(command, lambda x: 10 ** x,
                                     lambda x: math.pow(10, x))

    def asin(self, command):
        self._transcendental_command(
            command, cmath.asin,
            lambda x: _normalize_trig(self.from_radians(math.asin(x))))

    def atan(self, command):
        self._transcendental_command(
            command, cmath.atan,
            lambda x: _normalize_trig(self.from_radians(math.atan(x))))

    def ceil(self, command):
        value = self.use_top_scalar_numeric_value(command)
        if value.value_type is ValueType.DOUBLE:
            value = DoubleValue(math.ceil(value.value))
        elif value.value_type is ValueType.FRACTION:
            value = value.ceiling()
        command.commit(value)

    def comb(self, command):
        '''
        Combinations of r (top) items out of n (second).
        '''
        self._comb_perm(command, math.comb)

    def cos(self, command):
        self._transcendental_command(
            command, cmath.cos,
            lambda x: _normalize_trig(math.cos(self.to_radians(x))))

    def cosh(self, command):
        self._transcendental_command(
            command, cmath.cosh,
            lambda x: _normalize_trig(math.cosh(self.to_radians(x))))

    def divide(self, command):
        self._binary_operation(command, operations.divide)

    def degrees_to_radians(self, command):
        value = self.use_top_scalar_numeric_value(command)
        command.commit(DoubleValue(math.radians(value.to_double())))

    def exp(self, command):
        self._transcendental_command(command, cmath.exp, math.exp)

    def fact(self, command):
        value = self.use_top_scalar_numeric_value(command)
        command.commit(IntegerValue(self.require_integer(value)).factorial())

    def floor(self, command):
        value = self.use_top_scalar_numeric_value(command)
        if value.value_type is ValueType.DOUBLE:
            value = DoubleValue(math.floor(value.value))
        elif value.value_type is ValueType.FRACTION:
            value = value.floor()
        command.commit(value)

    def frac(self, command):
        value = self.use_top_scalar_numeric_value(command)
        if value.value_type is ValueType.DOUBLE:
            value = DoubleValue(value.value - truncate(value.value))
        elif value.value_type is ValueType.FRACTION:
            value = value.fractional_part
        elif value.value_type is ValueType.INTEGER:
            value = IntegerValue(0)
        else:
            value = BinaryValue(0)
        command.commit(value)

    def gcd(self, command):
        x, y = self.use_top_two_scalar_numeric_values(command)
        command.commit(operations.gcd(x, y))

    def hyp(self, command):
        '''
        Hypotenuse of a right triangle with the top two values as legs.
        '''
        x, y = self.use_top_two_numeric_values(command)
        settings = self.settings
        total = operations.add(operations.multiply(x, x, settings),
                               operations.multiply(y, y, settings),
                               settings)
        command.commit(operations.sqrt(total))

    def int(self, command):
        value = self.use_top_scalar_numeric_value(command)
        if value.value_type is ValueType.DOUBLE:
            value = DoubleValue(truncate(value.value))
        elif value.value_type is ValueType.FRACTION:
            value = value.whole_part
        command.commit(value)

    def invert(self, command):
        value = self.use_top_numeric_value(command)
        command.commit(operations.invert(value))

    def lcm(self, command):
        x, y = self.use_top_two_scalar_numeric_values(command)
        command.commit(operations.lcm(x, y, self.settings))

    def ln(self, command):
        self._transcendental_command(command, cmath.log, math.log, math.log)

    def log(self, command):
        self._transcendental_command(command, cmath.log10, math.log10,
                                     math.log10)

    def max(self, command):
        self._compare2(command, 1)

    def min(self, command):
        self._compare2(command, -1)

    def _compare2(self, command, sign):
        '''
        Keep the top value if it compares to the second with sign.
        '''
        self.require_args(2)
        self.require_scalar_numeric_type_or(0, ValueType.DATETIME,
                                            ValueType.TIMESPAN)
        self.require_scalar_numeric_type_or(1, ValueType.DATETIME,
                                            ValueType.TIMESPAN)
        x, y = command.use_top_values(2)
        command.commit(x if operations.compare(x, y) == sign else y)

    def mod(self, command):
        x, y = self.use_top_two_numeric_values(command)
        command.commit(operations.modulus(y, x, self.settings))

    def multiply(self, command):
        self._binary_operation(command, operations.multiply)

    def negate(self, command):
        self.require_args(1)
        value = command.use_top_value()
        command.commit(operations.negate(value, self.settings))

    def percent(self, command):
        '''
        Top percent of the second: xy/100.
        '''
        x, y = self.use_top_two_numeric_values(command)
        settings = self.settings
        command.commit(operations.divide(operations.multiply(x, y, settings),
                                         ONE_HUNDRED, settings))

    def percent_change(self, command):
        '''
        Change from the second to the top as a percentage: 100(x - y)/y.
        '''
        x, y = self.use_top_two_numeric_values(command)
        settings = self.settings
        change = operations.multiply(ONE_HUNDRED,
                                     operations.subtract(x, y, settings),
                                     settings)
        command.commit(operations.divide(change, y, settings))

    def percent_total(self, command):
        '''
        The top as a percentage of the second: 100x/y.
        '''
        x, y = self.use_top_two_numeric_values(command)
        settings = self.settings
        command.commit(operations.divide(
            operations.multiply(ONE_HUNDRED, x, settings), y, settings))

    def perm(self, command):
        '''
        Permutations of r (top) items out of n (second).
        '''
        self._comb_perm(command, math.perm)

    def _comb_perm(self, command, function):
        first, second = self.use_top_two_scalar_numeric_values(command)
        r = self.require_integer(first)
        n = self.require_integer(second)
        if r < 0 or n < r:
            raise ArgumentOutOfRangeError(
                '{} items cannot be chosen from {}'.format(r, n))
        command.commit(IntegerValue(function(n, r)))

    def power(self, command):
        x, y = self.use_top_two_numeric_values(command)
        command.commit(operations.power(y, x))

    def radians_to_degrees(self, command):
        value = self.use_top_scalar_numeric_value(command)
        command.commit(DoubleValue(math.degrees(value.to_double())))

    def random(self, command):
        command.commit(DoubleValue(self.randomizer.random()))

    def random_between(self, command):
        '''
        Random double from the second value up to the top value.
        '''
        first, second = self.use_top_two_scalar_numeric_values(command)
        low = second.to_double()
        high = first.to_double()
        offset = (high - low) * self.randomizer.random()
        command.commit(DoubleValue(low + offset))

    def round(self, command):
        self._round(command, round_half_away)

    def set_random_seed(self, command):
        '''
        Seed the random numbers with the top value; 0 picks a fresh seed.
        '''
        value = self.use_top_scalar_numeric_value(command)
        seed = self.require_integer(value)
        if seed == 0:
            self.randomizer = random.Random()
        else:
            self.randomizer = random.Random(seed)
        command.commit()

    def sign(self, command):
        self.require_args(1)
        self.require_complex_numeric_type_or(0, ValueType.TIMESPAN)
        value = command.use_top_value()
        command.commit(operations.sign(value, self.settings))

    def sin(self, command):
        self._transcendental_command(
            command, cmath.sin,
            lambda x: _normalize_trig(math.sin(self.to_radians(x))))

    def sinh(self, command):
        self._transcendental_command(
            command, cmath.sinh,
            lambda x: _normalize_trig(math.sinh(self.to_radians(x))))

    def sqrt(self, command):
        value = self.use_top_numeric_value(command)
        command.commit(operations.sqrt(value))

    def square(self, command):
        value = self.use_top_numeric_value(command)
        command.commit(operations.multiply(value, value, self.settings))

    def subtract(self, command):
        self._binary_operation(command, operations.subtract)

    def tan(self, command):
        self._transcendental_command(
            command, cmath.tan,
            lambda x: _normalize_trig(math.tan(self.to_radians(x))))

    def tanh(self, command):
        self._transcendental_command(
            command, cmath.tanh,
            lambda x: _normalize_trig(math.tanh(self.to_radians(x))))

    def trunc(self, command):
        self._round(command, truncate)

    def _round(self, command, function):
        '''
        Round the second value at the number of places on top.

        Complex numbers have both parts rounded, whatever the display format.
        '''
        self.require_args(2)
        self.require_complex_numeric_type(1)
        self.require_scalar_numeric_type(0)
        places, value = command.use_top_values(2)
        places = places.to_integer()
        if value.value_type is ValueType.COMPLEX:
            value = ComplexValue(function(value.real, places),
                                 function(value.imaginary, places))
        elif value.value_type in (ValueType.DOUBLE, ValueType.FRACTION):
            value = DoubleValue(function(value.to_double(), places))
        command.commit(value)

    def xroot(self, command):
        '''
        The top-th root of the second value.
        '''
        x, y = self.use_top_two_numeric_values(command)
        command.commit(operations.power(y, operations.invert(x)))

    COMMANDS = {
        'Abs': abs,
        'ACos': acos,
        'Add': add,
        'ALog': alog,
        'ASin': asin,
        'ATan': atan,
        'Ceil': ceil,
        'Comb': comb,
        'Cos': cos,
        'CosH': cosh,
        'Divide': divide,
        'DtoR': degrees_to_radians,
        'Exp': exp,
        'Fact': fact,
        'Floor': floor,
        'Frac': frac,
        'Gcd': gcd,
        'Hyp': hyp,
        'Int': int,
        'Invert': invert,
        'Lcm': lcm,
        'Ln': ln,
        'Log': log,
        'Max': max,
        'Min': min,
        'Mod': mod,
        'Multiply': multiply,
        'Negate': negate,
        'Percent': percent,
        'PercentChange': percent_change,
        'PercentTotal': percent_total,
        'Perm': perm,
        'Power': power,
        'Random': random,
        'RandomBetween': random_between,
        'Round': round,
        'RtoD': radians_to_degrees,
        'SetRandomSeed': set_random_seed,
        'Sign': sign,
        'Sin': sin,
        'SinH': sinh,
        'Sqrt': sqrt,
        'Square': square,
        'Subtract': subtract,
        'Tan': tan,
        'TanH': tanh,
        'Trunc': trunc,
        'XRoot': xroot,
    }
