'''
Operations over values of possibly different types.

Numeric operands are promoted to the higher ranked type first, so each
value class only ever deals with its own type.
'''

import cmath
import logging

from .numeric import MASK64, BinaryValue, ComplexValue, DoubleValue, \
    FractionValue, IntegerValue, double_to_fraction
from .temporal import DateTimeValue, TimeSpanValue
from .util import InvalidCastError, UnsupportedOperationError
from .value import NumericValue, ValueType


logger = logging.getLogger(__name__)


VALUE_CLASSES = {
    ValueType.BINARY: BinaryValue,
    ValueType.INTEGER: IntegerValue,
    ValueType.FRACTION: FractionValue,
    ValueType.DOUBLE: DoubleValue,
    ValueType.COMPLEX: ComplexValue,
    ValueType.DATETIME: DateTimeValue,
    ValueType.TIMESPAN: TimeSpanValue,
}

HALF = FractionValue(1, 2)


def unsupported(operation, *values):
    '''
    Build the error for an operation the operand types don't support.
    '''
    if len(values) == 1:
        return UnsupportedOperationError(
            "'{}' not supported for {}".format(operation,
                                               values[0].value_type))
    x, y = values
    return UnsupportedOperationError(
        "'{}' not supported for {} and {}".format(operation, x.value_type,
                                                   y.value_type))


def change_type(value, target):
    '''
    Convert a numeric value to another numeric type.
    '''
    source = value.value_type
    if source is target:
        return value
    if target is ValueType.BINARY:
        return BinaryValue(value.to_integer() & MASK64)
    elif target is ValueType.INTEGER:
        return IntegerValue(value.to_integer())
    elif target is ValueType.FRACTION:
        if source in (ValueType.DOUBLE, ValueType.COMPLEX):
            return double_to_fraction(value.to_double())
        return FractionValue(value.to_integer())
    elif target is ValueType.DOUBLE:
        return DoubleValue(value.to_double())
    elif target is ValueType.COMPLEX:
        return ComplexValue(value.to_complex())
    raise InvalidCastError('Unable to change {} to {}'.format(source, target))


def promote(x, y):
    '''
    Return x and y converted to a common type if both are numeric.
    '''
    if isinstance(x, NumericValue) and isinstance(y, NumericValue):
        if x.value_type.rank < y.value_type.rank:
            x = change_type(x, y.value_type)
        elif x.value_type.rank > y.value_type.rank:
            y = change_type(y, x.value_type)
    return x, y


def _numeric_pair(operation, x, y):
    x, y = promote(x, y)
    if not isinstance(x, NumericValue) or x.value_type is not y.value_type:
        raise unsupported(operation, x, y)
    return x, y


def add(x, y, settings=None):
    x, y = promote(x, y)
    if x.value_type is y.value_type:
        if isinstance(x, NumericValue):
            return x.add(y, settings)
        elif isinstance(x, TimeSpanValue):
            return x.add(y)
    elif isinstance(x, DateTimeValue) and isinstance(y, TimeSpanValue):
        return x.add(y)
    elif isinstance(x, TimeSpanValue) and isinstance(y, DateTimeValue):
        return y.add(x)
    raise unsupported('Add', x, y)


def subtract(x, y, settings=None):
    x, y = promote(x, y)
    if x.value_type is y.value_type:
        if isinstance(x, NumericValue):
            return x.subtract(y, settings)
        elif isinstance(x, TimeSpanValue):
            return x.subtract(y)
        elif isinstance(x, DateTimeValue):
            return x.difference(y)
    elif isinstance(x, DateTimeValue) and isinstance(y, TimeSpanValue):
        return x.subtract(y)
    raise unsupported('Subtract', x, y)


def multiply(x, y, settings=None):
    x, y = promote(x, y)
    if x.value_type is y.value_type and isinstance(x, NumericValue):
        return x.multiply(y, settings)
    elif isinstance(x, TimeSpanValue) and isinstance(y, NumericValue):
        return x.multiply(y.to_double())
    elif isinstance(x, NumericValue) and isinstance(y, TimeSpanValue):
        return y.multiply(x.to_double())
    raise unsupported('Multiply', x, y)


def divide(x, y, settings=None):
    x, y = promote(x, y)
    if x.value_type is y.value_type:
        if isinstance(x, NumericValue):
            return x.divide(y, settings)
        elif isinstance(x, TimeSpanValue):
            return DoubleValue(x.ratio(y))
    elif isinstance(x, TimeSpanValue) and isinstance(y, NumericValue):
        return x.divide(y.to_double())
    raise unsupported('Divide', x, y)


def negate(value, settings=None):
    if isinstance(value, NumericValue):
        return value.negate(settings)
    elif isinstance(value, TimeSpanValue):
        return value.negate()
    raise unsupported('Negate', value)


def abs_value(value, settings=None):
    '''
    Return the absolute value; a complex number's is its magnitude.
    '''
    if isinstance(value, ComplexValue):
        return DoubleValue(value.magnitude())
    elif isinstance(value, BinaryValue):
        return value.negate(settings) if value.sign(settings) < 0 else value
    elif isinstance(value, TimeSpanValue):
        return value.abs()
    elif isinstance(value, NumericValue):
        return value.negate(settings) if value.sign() < 0 else value
    raise unsupported('Abs', value)


def sign(value, settings=None):
    '''
    Return -1, 0, or 1 as an Integer; a complex number's is its unit vector.
    '''
    if isinstance(value, ComplexValue):
        if value.value == 0:
            return ComplexValue(0j)
        return ComplexValue(value.value / value.magnitude())
    elif isinstance(value, BinaryValue):
        return IntegerValue(value.sign(settings))
    elif isinstance(value, (NumericValue, TimeSpanValue)):
        return IntegerValue(value.sign())
    raise unsupported('Sign', value)


def compare(x, y):
    '''
    Compare after promoting numeric operands.
    '''
    x, y = promote(x, y)
    return x.compare(y)


def power(x, y):
    x, y = _numeric_pair('Power', x, y)
    return x.power(y)


def invert(value):
    if not isinstance(value, NumericValue):
        raise unsupported('Invert', value)
    return value.invert()


def modulus(x, y, settings=None):
    x, y = _numeric_pair('Modulus', x, y)
    if isinstance(x, ComplexValue):
        raise unsupported('Modulus', x, y)
    return x.modulus(y, settings)


def sqrt(value):
    '''
    Square root; complex for complex operands and negative reals.
    '''
    if isinstance(value, ComplexValue) or (
            isinstance(value, (IntegerValue, FractionValue, DoubleValue)) and
            value.sign() < 0):
        return ComplexValue(cmath.sqrt(value.to_complex()))
    return power(value, HALF)


def gcd(x, y):
    x, y = _numeric_pair('Gcd', x, y)
    if isinstance(x, ComplexValue):
        raise unsupported('Gcd', x, y)
    return x.gcd(y)


def lcm(x, y, settings=None):
    return divide(multiply(x, y, settings), gcd(x, y), settings)


def factorial(value):
    if not isinstance(value, IntegerValue):
        raise unsupported('Factorial', value)
    return value.factorial()


def parse_value(value_type, text, settings=None):
    '''
    Parse text as the given type of value, or return None.
    '''
    return VALUE_CLASSES[value_type].parse(text, settings)


def load_value(node, settings=None):
    '''
    Read a value saved by save_value(), or return None if it doesn't parse.
    '''
    type_text = node.get_value('ValueType', None)
    entry = node.get_value('EntryValue', None)
    if type_text is None or entry is None:
        return None
    try:
        value_type = ValueType(type_text)
    except ValueError:
        logger.debug('Unknown value type %r', type_text)
        return None
    return parse_value(value_type, entry, settings)


def save_value(value, node, settings=None):
    node.set_value('ValueType', value.value_type.value)
    node.set_value('EntryValue', value.entry_text(settings))
