'''
Display settings consulted whenever values are formatted or parsed.
'''

from enum import Enum
import logging
import math

from .util import ArgumentOutOfRangeError


logger = logging.getLogger(__name__)


class AngleMode(Enum):
    RADIANS = 'radians'
    DEGREES = 'degrees'


class BinaryFormat(Enum):
    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16


class ComplexFormat(Enum):
    RECTANGULAR = 'rectangular'
    POLAR = 'polar'


class DecimalFormat(Enum):
    STANDARD = 'standard'
    FIXED = 'fixed'
    SCIENTIFIC = 'scientific'


class FractionFormat(Enum):
    COMMON = 'common'
    MIXED = 'mixed'
    DECIMAL = 'decimal'


def _bounded(low, high):
    def validate(value):
        value = int(value)
        if not low <= value <= high:
            raise ArgumentOutOfRangeError(
                '{} is not between {} and {}'.format(value, low, high))
        return value
    return validate


def _member_of(enum):
    def validate(value):
        return enum(value) if not isinstance(value, enum) else value
    return validate


class Setting:
    '''
    Descriptor for one display setting.

    Assigning a different value notifies the owner's observers once.
    '''

    def __init__(self, default, validate=None):
        self.default = default
        self.validate = validate or _member_of(type(default))

    def __set_name__(self, owner, name):
        self.name = name
        owner.NAMES = getattr(owner, 'NAMES', ()) + (name,)

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance._values.get(self.name, self.default)

    def __set__(self, instance, value):
        value = self.validate(value)
        old = self.__get__(instance)
        if value == old:
            return
        instance._values[self.name] = value
        logger.debug('%s changed from %s to %s', self.name, old, value)
        instance._notify(self.name, old, value)


class DisplaySettings:
    '''
    Mutable display settings with change notification.
    '''

    angle_mode = Setting(AngleMode.DEGREES)
    binary_format = Setting(BinaryFormat.DECIMAL)
    binary_word_size = Setting(64, _bounded(1, 64))
    complex_format = Setting(ComplexFormat.RECTANGULAR)
    decimal_format = Setting(DecimalFormat.STANDARD)
    fixed_decimal_digits = Setting(6, _bounded(0, 15))
    fraction_format = Setting(FractionFormat.MIXED)

    def __init__(self, **values):
        self._values = {}
        self._observers = []
        for name, value in values.items():
            if name not in self.NAMES:
                raise TypeError('Unknown display setting {!r}'.format(name))
            setattr(self, name, value)

    def subscribe(self, callback):
        '''
        Call callback(name, old, new) after every setting change.
        '''
        self._observers.append(callback)

    def unsubscribe(self, callback):
        self._observers.remove(callback)

    def _notify(self, name, old, new):
        for callback in list(self._observers):
            callback(name, old, new)

    def to_radians(self, angle):
        '''
        Convert an angle in the current angle mode to radians.
        '''
        if self.angle_mode is AngleMode.DEGREES:
            return math.radians(angle)
        return angle

    def from_radians(self, radians):
        '''
        Convert radians to an angle in the current angle mode.
        '''
        if self.angle_mode is AngleMode.DEGREES:
            return math.degrees(radians)
        return radians

    def __repr__(self):
        return 'DisplaySettings({})'.format(
            ', '.join('{}={!r}'.format(name, getattr(self, name))
                      for name in self.NAMES))
