'''
Commands that push constants.
'''

from datetime import datetime
import math
import sys

from ..numeric import ComplexValue, DoubleValue, IntegerValue
from ..temporal import DateTimeValue
from ..util import MAX_LONG, MIN_LONG
from .base import Commands


MAX_INTEGER = 2 ** 31 - 1
MIN_INTEGER = -2 ** 31


def constant(value):
    def push(self, command):
        command.commit(value)
    return push


class ConstantCommands(Commands):

    COMMANDS = {
        'E': constant(DoubleValue(math.e)),
        'I': constant(ComplexValue(1j)),
        'MaxDate': constant(DateTimeValue(datetime.max)),
        'MaxDouble': constant(DoubleValue(sys.float_info.max)),
        'MaxInteger': constant(IntegerValue(MAX_INTEGER)),
        'MaxLong': constant(IntegerValue(MAX_LONG)),
        'MinDate': constant(DateTimeValue(datetime.min)),
        'MinDouble': constant(DoubleValue(-sys.float_info.max)),
        'MinInteger': constant(IntegerValue(MIN_INTEGER)),
        'MinLong': constant(IntegerValue(MIN_LONG)),
        'Pi': constant(DoubleValue(math.pi)),
    }
