'''
Conversions between TimeSpans and numbers of hours, minutes or seconds.
'''

from datetime import timedelta

from ..numeric import DoubleValue
from ..temporal import MICROSECONDS_PER_SECOND, TimeSpanValue
from ..util import CalcOverflowError, wrap_user_errors
from ..value import ValueType
from .base import Commands


SECONDS = {
    'hours': 3600,
    'minutes': 60,
    'seconds': 1,
}


class TimeSpanCommands(Commands):

    def use_top_double(self, command):
        self.require_args(1)
        self.require_scalar_numeric_type(0)
        return command.use_top_value().to_double()

    def use_top_timespan(self, command):
        self.require_args(1)
        self.require_type(0, ValueType.TIMESPAN)
        return command.use_top_value()

    @wrap_user_errors(CalcOverflowError, 'Duration is out of range',
                      catch=(OverflowError,))
    def _from_units(self, command, unit):
        amount = self.use_top_double(command)
        command.commit(TimeSpanValue(timedelta(**{unit: amount})))

    def _to_units(self, command, unit):
        value = self.use_top_timespan(command)
        total = value.total_microseconds / MICROSECONDS_PER_SECOND
        command.commit(DoubleValue(total / SECONDS[unit]))

    def from_hours(self, command):
        self._from_units(command, 'hours')

    def to_hours(self, command):
        self._to_units(command, 'hours')

    def from_minutes(self, command):
        self._from_units(command, 'minutes')

    def to_minutes(self, command):
        self._to_units(command, 'minutes')

    def from_seconds(self, command):
        self._from_units(command, 'seconds')

    def to_seconds(self, command):
        self._to_units(command, 'seconds')

    COMMANDS = {
        'FromHr': from_hours,
        'FromMin': from_minutes,
        'FromSec': from_seconds,
        'ToHr': to_hours,
        'ToMin': to_minutes,
        'ToSec': to_seconds,
    }
