'''
Command groups, in the order command names are looked up.
'''

from .base import Commands
from .binary import BinaryCommands
from .complex import ComplexCommands
from .constant import ConstantCommands
from .date import DateTimeCommands
from .duration import TimeSpanCommands
from .entry import EntryCommands
from .fraction import FractionCommands
from .math import MathCommands
from .stack import StackCommands


def command_groups(calculator):
    '''
    Return one instance of each command group bound to calculator.
    '''
    stack = StackCommands(calculator)
    return [
        stack,
        EntryCommands(calculator, stack),
        MathCommands(calculator),
        BinaryCommands(calculator),
        FractionCommands(calculator),
        TimeSpanCommands(calculator),
        DateTimeCommands(calculator),
        ConstantCommands(calculator),
        ComplexCommands(calculator),
    ]


__all__ = 'Commands', 'command_groups'
