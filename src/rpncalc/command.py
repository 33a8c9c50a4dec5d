'''
A single command execution's transaction against the stack.
'''

from enum import Enum
import math

from .numeric import ComplexValue, DoubleValue, FractionValue, IntegerValue
from .util import CommandStateError, NotFiniteNumberError, is_integer, \
    is_really_near_zero


# Complex parts below NEAR_ZERO next to a part above NON_TRIVIAL are noise.
NON_TRIVIAL = 1e-5
NEAR_ZERO = 1e-14


class CommandState(Enum):
    OPEN = 'open'
    COMMITTED = 'committed'
    CANCELLED = 'cancelled'


def _validate(value):
    if not math.isfinite(value):
        raise NotFiniteNumberError()


def _reduce_double(value):
    if is_integer(value):
        return IntegerValue(int(value))
    return DoubleValue(value)


def _reduce_complex(value):
    real, imaginary = value.real, value.imag
    if abs(real) > NON_TRIVIAL and is_really_near_zero(imaginary, NEAR_ZERO):
        imaginary = 0.0
    if is_really_near_zero(real, NEAR_ZERO) and abs(imaginary) > NON_TRIVIAL:
        real = 0.0
    if imaginary == 0:
        return _reduce_double(real)
    return ComplexValue(real, imaginary)


def validate_and_reduce(values):
    '''
    Reject non-finite results and simplify the rest to their plainest type.

    Integral doubles become Integers, complexes without an imaginary part
    become real, and whole fractions become Integers.
    '''
    reduced = []
    for value in values:
        if isinstance(value, ComplexValue):
            _validate(value.real)
            _validate(value.imaginary)
            value = _reduce_complex(value.value)
        elif isinstance(value, DoubleValue):
            _validate(value.value)
            value = _reduce_double(value.value)
        elif isinstance(value, FractionValue) and value.denominator == 1:
            value = IntegerValue(value.numerator)
        reduced.append(value)
    return reduced


class Command:
    '''
    Transaction for one command execution.

    A command peeks at the values it needs with use_top_values(), computes,
    and then either commits its results, which replaces the used values, or
    cancels, leaving the stack alone.
    '''

    def __init__(self, calculator):
        self.calculator = calculator
        self.state = CommandState.OPEN
        self.last_args = None
        self._used = 0

    @property
    def stack(self):
        return self.calculator.stack

    def use_top_values(self, count):
        '''
        Peek at the top count values, top first, to be replaced on commit.
        '''
        values = self.stack.peek_range(count)
        self._used = count
        return values

    def use_top_value(self):
        return self.use_top_values(1)[0]

    def set_last_args(self, values):
        '''
        Remember values as the last arguments, replacing nothing on commit.
        '''
        self.last_args = list(values)
        self._used = 0

    def commit(self, *values):
        self.push_results(CommandState.COMMITTED, values)

    def cancel(self):
        if self.state is CommandState.COMMITTED:
            raise CommandStateError('Cannot cancel a committed command')
        self.state = CommandState.CANCELLED
        self._used = 0
        self.last_args = None

    def push_results(self, state, values):
        '''
        Replace the used values with values, then end in state.

        Nothing changes if any value is rejected.
        '''
        values = validate_and_reduce(values)
        if self._used > 0:
            self.last_args = self.stack.pop_range(self._used)
        self.stack.push_range(values)
        self.state = state

    def push_last_args(self):
        '''
        Push the last arguments back, in their original stack order.
        '''
        if self.last_args is not None:
            self.stack.push_range(reversed(self.last_args))
