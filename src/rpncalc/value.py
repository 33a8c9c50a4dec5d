'''
Base classes shared by every kind of value the calculator can stack.
'''

from collections import namedtuple
from enum import Enum

from .settings import DisplaySettings
from .util import ArgumentError


class ValueType(Enum):
    '''
    Kinds of values, numeric ones in promotion order.
    '''
    BINARY = 'Binary'
    INTEGER = 'Integer'
    FRACTION = 'Fraction'
    DOUBLE = 'Double'
    COMPLEX = 'Complex'
    DATETIME = 'DateTime'
    TIMESPAN = 'TimeSpan'

    @property
    def rank(self):
        return _RANKS[self]

    @property
    def is_numeric(self):
        return self.rank <= _RANKS[ValueType.COMPLEX]

    def __str__(self):
        return self.value


_RANKS = {value_type: rank for rank, value_type in enumerate(ValueType)}

SCALAR_NUMERIC_TYPES = (ValueType.INTEGER, ValueType.DOUBLE,
                        ValueType.FRACTION, ValueType.BINARY)
COMPLEX_NUMERIC_TYPES = SCALAR_NUMERIC_TYPES + (ValueType.COMPLEX,)


DisplayFormat = namedtuple('DisplayFormat', 'name text')


def resolve(settings):
    '''
    Return settings, or defaults if there aren't any.
    '''
    return settings if settings is not None else DisplaySettings()


class Value:
    '''
    Immutable, typed, stackable datum.

    Subclasses define value_type, _key() for equality and ordering, and
    to_string().
    '''

    __slots__ = ()
    value_type = None

    def _key(self):
        raise NotImplementedError

    def to_string(self, settings=None):
        '''
        Return display text, using settings if given.
        '''
        raise NotImplementedError

    def entry_text(self, settings=None):
        '''
        Return text that parses back to exactly this value.
        '''
        return self.to_string(settings)

    def display_formats(self, settings=None):
        '''
        Return alternate representations as DisplayFormats.
        '''
        return [DisplayFormat(None, self.to_string(settings))]

    def compare(self, other):
        '''
        Return -1, 0, or 1; anything is greater than nothing.
        '''
        if other is None:
            return 1
        if type(other) is not type(self):
            raise ArgumentError('Unable to compare {} and {}'.format(self,
                                                                    other))
        left, right = self._key(), other._key()
        return (left > right) - (left < right)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash((self.value_type, self._key()))

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self._key())


class NumericValue(Value):
    '''
    Value that can be converted to the other numeric types.
    '''

    __slots__ = ()

    def to_double(self):
        raise NotImplementedError

    def to_integer(self):
        raise NotImplementedError

    def to_complex(self):
        return complex(self.to_double(), 0.0)
