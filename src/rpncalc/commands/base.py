'''
Shared plumbing for command groups.
'''

from ..numeric import DoubleValue, FractionValue
from ..util import ArgumentError, InvalidOperationError, is_integer
from ..value import COMPLEX_NUMERIC_TYPES, SCALAR_NUMERIC_TYPES, ValueType


def _join_or(items):
    items = [str(item) for item in items]
    if len(items) == 1:
        return items[0]
    return '{} or {}'.format(', '.join(items[:-1]), items[-1])


class Commands:
    '''
    A group of named commands.

    Subclasses map names to their functions in COMMANDS and, for commands
    that take an int, in PARAMETRIZED_COMMANDS. Each function is called with
    the group, the Command transaction and, if parametrized, the int.
    '''

    COMMANDS = {}
    PARAMETRIZED_COMMANDS = {}

    def __init__(self, calculator):
        self.calculator = calculator

    @property
    def stack(self):
        return self.calculator.stack

    @property
    def settings(self):
        return self.calculator.settings

    def find_command(self, name, parameter=None):
        '''
        Return a callable taking a Command, or None if there's no such command.
        '''
        if parameter is None:
            function = type(self).COMMANDS.get(name)
            if function is None:
                return None
            return lambda command: function(self, command)
        function = type(self).PARAMETRIZED_COMMANDS.get(name)
        if function is None:
            return None
        return lambda command: function(self, command, parameter)

    def require_args(self, count):
        if len(self.stack) < count:
            if count == 1:
                message = 'An argument is required.'
            elif count == 2:
                message = 'Two arguments are required.'
            else:
                message = '{} arguments are required.'.format(count)
            raise InvalidOperationError(message)

    def require_type(self, offset, *value_types):
        value = self.stack.peek_at(offset)
        if value.value_type not in value_types:
            raise InvalidOperationError('Item {} must have type {}.'.format(
                offset + 1, _join_or(value_types)))

    def require_scalar_numeric_type(self, offset):
        if self.stack.peek_at(offset).value_type not in SCALAR_NUMERIC_TYPES:
            raise InvalidOperationError(
                'Item {} must be a scalar number.'.format(offset + 1))

    def require_complex_numeric_type(self, offset):
        if self.stack.peek_at(offset).value_type not in COMPLEX_NUMERIC_TYPES:
            raise InvalidOperationError(
                'Item {} must be a scalar or complex number.'.format(
                    offset + 1))

    def require_scalar_numeric_type_or(self, offset, *value_types):
        self.require_type(offset, *(SCALAR_NUMERIC_TYPES + value_types))

    def require_complex_numeric_type_or(self, offset, *value_types):
        self.require_type(offset, *(COMPLEX_NUMERIC_TYPES + value_types))

    def require_matching_types(self, first, second):
        if (self.stack.peek_at(first).value_type is not
                self.stack.peek_at(second).value_type):
            raise InvalidOperationError(
                'Items {} and {} must have the same type.'.format(first + 1,
                                                                 second + 1))

    @staticmethod
    def require_non_negative_count(count):
        if count < 0:
            raise ArgumentError('Count must be non-negative.')

    @staticmethod
    def require_positive_stack_position(position):
        if position < 1:
            raise ArgumentError('Stack position must be positive.')

    @staticmethod
    def require_integer(value):
        '''
        Return a numeric value as an int if it's integral.
        '''
        if isinstance(value, DoubleValue):
            integral = is_integer(value.value)
        elif isinstance(value, FractionValue):
            integral = value.denominator == 1
        else:
            integral = True
        if not integral:
            raise ArgumentError('An integer is required.')
        return value.to_integer()

    def top_as_integer(self):
        self.require_type(0, ValueType.INTEGER)
        return self.stack.peek_at(0).value

    def top_as_count(self):
        '''
        Return the Integer on top of the stack as a count.
        '''
        self.require_args(1)
        count = self.top_as_integer()
        self.require_non_negative_count(count)
        return count
