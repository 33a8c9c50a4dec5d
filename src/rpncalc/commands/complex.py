'''
Commands that build complex numbers and take them apart.
'''

from ..numeric import ComplexValue, DoubleValue
from ..value import ValueType
from .base import Commands


class ComplexCommands(Commands):

    def use_top_numeric_value(self, command):
        self.require_args(1)
        self.require_complex_numeric_type(0)
        return command.use_top_value()

    def conjugate(self, command):
        '''
        Conjugate a complex number; real numbers are their own conjugate.
        '''
        value = self.use_top_numeric_value(command)
        if value.value_type is ValueType.COMPLEX:
            value = ComplexValue(value.value.conjugate())
        command.commit(value)

    def complex_to_parts(self, command):
        self.require_args(1)
        self.require_type(0, ValueType.COMPLEX)
        value = command.use_top_value()
        command.commit(DoubleValue(value.real), DoubleValue(value.imaginary))

    def imaginary(self, command):
        value = self.use_top_numeric_value(command)
        if value.value_type is ValueType.COMPLEX:
            command.commit(DoubleValue(value.imaginary))
        else:
            command.commit(DoubleValue(0))

    def real(self, command):
        value = self.use_top_numeric_value(command)
        if value.value_type is ValueType.COMPLEX:
            value = DoubleValue(value.real)
        command.commit(value)

    def parts_to_complex(self, command):
        '''
        Make a complex number from the second (real) and top (imaginary).
        '''
        self.require_args(2)
        self.require_scalar_numeric_type(0)
        self.require_scalar_numeric_type(1)
        imaginary, real = command.use_top_values(2)
        command.commit(ComplexValue(real.to_double(), imaginary.to_double()))

    def phase(self, command):
        '''
        Angle of a complex number in the current angle mode.

        Its magnitude is what Abs gives.
        '''
        self.require_args(1)
        self.require_type(0, ValueType.COMPLEX)
        value = command.use_top_value()
        command.commit(DoubleValue(self.settings.from_radians(value.phase())))

    COMMANDS = {
        'Conj': conjugate,
        'CtoR': complex_to_parts,
        'Imag': imaginary,
        'Phase': phase,
        'Real': real,
        'RtoC': parts_to_complex,
    }
