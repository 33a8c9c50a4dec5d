'''
Conversions between fractions and their parts.
'''

from ..numeric import DoubleValue, FractionValue, IntegerValue, \
    double_to_fraction
from ..value import ValueType
from .base import Commands


class FractionCommands(Commands):

    def fraction_to_parts(self, command):
        '''
        Split a Fraction into its numerator and denominator.
        '''
        self.require_args(1)
        self.require_type(0, ValueType.FRACTION)
        value = command.use_top_value()
        command.commit(IntegerValue(value.numerator),
                       IntegerValue(value.denominator))

    def parts_to_fraction(self, command):
        '''
        Make a Fraction from the second value over the top value.
        '''
        self.require_args(2)
        self.require_scalar_numeric_type(0)
        self.require_scalar_numeric_type(1)
        denominator, numerator = command.use_top_values(2)
        command.commit(FractionValue(numerator.to_integer(),
                                     denominator.to_integer()))

    def double_to_fraction(self, command):
        self.require_args(1)
        self.require_scalar_numeric_type(0)
        value = command.use_top_value()
        if value.value_type is ValueType.DOUBLE:
            value = double_to_fraction(value.value)
        elif value.value_type is not ValueType.FRACTION:
            value = FractionValue(value.to_integer())
        command.commit(value)

    def fraction_to_double(self, command):
        self.require_args(1)
        self.require_type(0, ValueType.FRACTION)
        value = command.use_top_value()
        command.commit(DoubleValue(value.to_double()))

    COMMANDS = {
        'DtoF': double_to_fraction,
        'FtoD': fraction_to_double,
        'FtoR': fraction_to_parts,
        'RtoF': parts_to_fraction,
    }
