'''
Calendar commands on DateTime values.
'''

from datetime import date, datetime, time

from ..numeric import IntegerValue
from ..temporal import DateTimeValue, TimeSpanValue
from ..value import ValueType
from .base import Commands


def age(birth, on):
    '''
    Return whole years from birth to on, negative if birth is later.
    '''
    sign = 1
    if birth > on:
        birth, on = on, birth
        sign = -1
    years = on.year - birth.year
    if (on.month, on.day) < (birth.month, birth.day):
        years -= 1
    return sign * years


def time_of_day(value):
    return TimeSpanValue(value - datetime.combine(value.date(), time()))


def today():
    return datetime.combine(date.today(), time())


class DateTimeCommands(Commands):

    def use_top_datetime(self, command):
        self.require_args(1)
        self.require_type(0, ValueType.DATETIME)
        return command.use_top_value().value

    def age_on(self, command):
        '''
        Age in years at the top date of someone born on the second date.
        '''
        self.require_args(2)
        self.require_type(0, ValueType.DATETIME)
        self.require_type(1, ValueType.DATETIME)
        on, birth = command.use_top_values(2)
        command.commit(IntegerValue(age(birth.value, on.value)))

    def age_today(self, command):
        birth = self.use_top_datetime(command)
        command.commit(IntegerValue(age(birth, today())))

    def date(self, command):
        command.commit(DateTimeValue(today()))

    def date_part(self, command):
        value = self.use_top_datetime(command)
        command.commit(DateTimeValue(datetime.combine(value.date(), time())))

    def day_of_year(self, command):
        value = self.use_top_datetime(command)
        command.commit(IntegerValue(value.timetuple().tm_yday))

    def now(self, command):
        command.commit(DateTimeValue(datetime.now()))

    def time(self, command):
        '''
        Push the current time of day as a TimeSpan.
        '''
        command.commit(time_of_day(datetime.now()))

    def time_part(self, command):
        value = self.use_top_datetime(command)
        command.commit(time_of_day(value))

    def weekday(self, command):
        '''
        Day of the week, Sunday being 1.
        '''
        value = self.use_top_datetime(command)
        command.commit(IntegerValue(value.isoweekday() % 7 + 1))

    COMMANDS = {
        'AgeOn': age_on,
        'AgeToday': age_today,
        'Date': date,
        'DatePart': date_part,
        'DayOfYear': day_of_year,
        'Now': now,
        'Time': time,
        'TimePart': time_part,
        'Weekday': weekday,
    }
