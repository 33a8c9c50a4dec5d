'''
Bitwise commands on Binary words.
'''

from ..numeric import MASK64, BinaryValue, IntegerValue
from ..value import ValueType
from .base import Commands


class BinaryCommands(Commands):

    def use_top_two_binary_values(self, command):
        self.require_args(2)
        self.require_type(0, ValueType.BINARY)
        self.require_type(1, ValueType.BINARY)
        return command.use_top_values(2)

    def use_bits_and_binary(self, command):
        '''
        Return the bit count on top and the Binary word under it.
        '''
        self.require_args(2)
        self.require_type(0, ValueType.INTEGER, ValueType.DOUBLE)
        self.require_type(1, ValueType.BINARY)
        bits, value = command.use_top_values(2)
        return bits.to_integer(), value

    def bitwise_and(self, command):
        x, y = self.use_top_two_binary_values(command)
        command.commit(x.bitwise_and(y))

    def binary_to_integer(self, command):
        self.require_args(1)
        self.require_type(0, ValueType.BINARY)
        value = command.use_top_value()
        command.commit(IntegerValue(value.to_integer()))

    def integer_to_binary(self, command):
        '''
        Convert to a Binary word, keeping the low 64 bits.
        '''
        self.require_args(1)
        self.require_type(0, ValueType.INTEGER, ValueType.DOUBLE)
        value = command.use_top_value()
        command.commit(BinaryValue(value.to_integer() & MASK64))

    def bitwise_not(self, command):
        self.require_args(1)
        self.require_type(0, ValueType.BINARY)
        value = command.use_top_value()
        command.commit(value.bitwise_not(self.settings))

    def bitwise_or(self, command):
        x, y = self.use_top_two_binary_values(command)
        command.commit(x.bitwise_or(y))

    def rotate_left(self, command):
        bits, value = self.use_bits_and_binary(command)
        command.commit(value.rotate_left(bits, self.settings))

    def rotate_right(self, command):
        bits, value = self.use_bits_and_binary(command)
        command.commit(value.rotate_right(bits, self.settings))

    def shift_left(self, command):
        bits, value = self.use_bits_and_binary(command)
        command.commit(value.shift_left(bits, self.settings))

    def shift_right(self, command):
        bits, value = self.use_bits_and_binary(command)
        command.commit(value.shift_right(bits, self.settings))

    def bitwise_xor(self, command):
        x, y = self.use_top_two_binary_values(command)
        command.commit(x.bitwise_xor(y))

    COMMANDS = {
        'And': bitwise_and,
        'BtoI': binary_to_integer,
        'ItoB': integer_to_binary,
        'Not': bitwise_not,
        'Or': bitwise_or,
        'RotateLeft': rotate_left,
        'RotateRight': rotate_right,
        'ShiftLeft': shift_left,
        'ShiftRight': shift_right,
        'Xor': bitwise_xor,
    }
