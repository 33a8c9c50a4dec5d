'''
Date/time and duration values.
'''

from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
import calendar

import regex

from .util import CalcOverflowError, DivideByZeroError, strip_delimiters
from .value import DisplayFormat, Value, ValueType


MICROSECONDS_PER_SECOND = 10 ** 6
# Fraction digits shown for durations: 100ns ticks.
TICK_DIGITS = 7

MIN_DATE = datetime.min.date()


def _total_microseconds(delta):
    return (delta.days * 86400 + delta.seconds) * MICROSECONDS_PER_SECOND + \
        delta.microseconds


def _from_microseconds(microseconds):
    try:
        return timedelta(microseconds=microseconds)
    except OverflowError as e:
        raise CalcOverflowError('Duration is out of range') from e


DURATION_FIELD = regex.compile(r'[-+]?\d+', flags=regex.VERSION1)
DURATION_SECONDS = regex.compile(r'[-+]?(?:\d+(?:\.\d*)?|\.\d+)',
                                 flags=regex.VERSION1)


def _duration_fields(fields):
    '''
    Map 2 to 4 colon-separated fields onto [days, hours, minutes, seconds].

    Return None if they don't fit any of M:S, H:M:S, D:H:M:S, D.H:M and
    D.H:M:S.
    '''
    first = fields[0]
    if '.' in first:
        days, _, hours = first.partition('.')
        if len(fields) == 2:
            return [days, hours, fields[1], None]
        elif len(fields) == 3:
            return [days, hours, fields[1], fields[2]]
        return None
    elif len(fields) == 2:
        return [None, None] + fields
    elif len(fields) == 3:
        return [None] + fields
    return fields


def parse_duration(text):
    '''
    Parse a colon-separated duration into a timedelta, or return None.

    Only the first field may be negative, which negates the whole duration.
    Only the seconds may have a fractional part.
    '''
    if not text:
        return None
    fields = [field for field in text.strip().split(':') if field]
    if not 2 <= len(fields) <= 4:
        return None
    fields = _duration_fields(fields)
    if fields is None:
        return None
    present = [field for field in fields if field]
    if len(present) < 2 or any('-' in field for field in present[1:]):
        return None
    if any('.' in field for field in fields[:3] if field):
        return None

    microseconds = 0
    for field, multiplier in zip(fields[:3], (86400, 3600, 60)):
        if not field:
            continue
        if DURATION_FIELD.fullmatch(field) is None:
            return None
        microseconds += abs(int(field)) * multiplier * MICROSECONDS_PER_SECOND
    seconds = fields[3]
    if seconds:
        if DURATION_SECONDS.fullmatch(seconds) is None:
            return None
        try:
            microseconds += int(abs(Decimal(seconds)) *
                                MICROSECONDS_PER_SECOND)
        except InvalidOperation:
            return None
    if present[0].startswith('-'):
        microseconds = -microseconds
    try:
        return timedelta(microseconds=microseconds)
    except OverflowError:
        return None


class TimeSpanValue(Value):
    '''
    Signed duration.
    '''

    __slots__ = ('_value',)
    value_type = ValueType.TIMESPAN

    SEPARATOR = ':'

    def __init__(self, value):
        self._value = value

    @property
    def value(self):
        return self._value

    @property
    def total_microseconds(self):
        return _total_microseconds(self._value)

    def _key(self):
        return self._value

    @classmethod
    def parse(cls, text, settings=None):
        value = parse_duration(text)
        return None if value is None else cls(value)

    def to_string(self, settings=None):
        '''
        Format as [-][d.]hh:mm:ss[.fffffff].
        '''
        microseconds = self.total_microseconds
        sign = '-' if microseconds < 0 else ''
        seconds, microseconds = divmod(abs(microseconds),
                                       MICROSECONDS_PER_SECOND)
        minutes, seconds = divmod(seconds, 60)
        hours, minutes = divmod(minutes, 60)
        days, hours = divmod(hours, 24)
        text = sign
        if days:
            text += '{}.'.format(days)
        text += '{:02d}:{:02d}:{:02d}'.format(hours, minutes, seconds)
        if microseconds:
            text += '.{:0{}d}'.format(microseconds * 10, TICK_DIGITS)
        return text

    def formatted(self):
        '''
        Format in words, e.g. "- 1 day 2 hr 3 min 4.500 sec".
        '''
        microseconds = self.total_microseconds
        parts = []
        if microseconds < 0:
            parts.append('-')
        seconds, microseconds = divmod(abs(microseconds),
                                       MICROSECONDS_PER_SECOND)
        minutes, seconds = divmod(seconds, 60)
        hours, minutes = divmod(minutes, 60)
        days, hours = divmod(hours, 24)
        milliseconds = microseconds // 1000
        if days:
            parts.append('{} day{}'.format(days, 's' if days != 1 else ''))
        if hours:
            parts.append('{} hr'.format(hours))
        if minutes:
            parts.append('{} min'.format(minutes))
        if milliseconds:
            parts.append('{}.{:03d} sec'.format(seconds, milliseconds))
        elif seconds:
            parts.append('{} sec'.format(seconds))
        return ' '.join(parts)

    def display_formats(self, settings=None):
        return [
            DisplayFormat(None, self.to_string(settings)),
            DisplayFormat('Formatted', self.formatted()),
        ]

    def sign(self):
        microseconds = self.total_microseconds
        return (microseconds > 0) - (microseconds < 0)

    def add(self, other):
        return TimeSpanValue(_from_microseconds(self.total_microseconds +
                                                other.total_microseconds))

    def subtract(self, other):
        return TimeSpanValue(_from_microseconds(self.total_microseconds -
                                                other.total_microseconds))

    def multiply(self, factor):
        '''
        Scale by a double, truncating to whole microseconds.
        '''
        return TimeSpanValue(_from_microseconds(
            int(self.total_microseconds * factor)))

    def divide(self, divisor):
        if divisor == 0:
            raise DivideByZeroError()
        return TimeSpanValue(_from_microseconds(
            int(self.total_microseconds / divisor)))

    def ratio(self, other):
        '''
        Return how many times other fits in this duration, as a float.
        '''
        if not other.total_microseconds:
            raise DivideByZeroError()
        return self.total_microseconds / other.total_microseconds

    def negate(self):
        return TimeSpanValue(_from_microseconds(-self.total_microseconds))

    def abs(self):
        return TimeSpanValue(_from_microseconds(abs(self.total_microseconds)))


DATE = regex.compile(r'''
                     (?:
                         (?<month>\d{1,2})/(?<day>\d{1,2})/(?<year>\d{1,4})
                         |
                         (?<year>\d{4})-(?<month>\d{1,2})-(?<day>\d{1,2})
                     )
                     ''', flags=regex.VERBOSE | regex.VERSION1)

TIME = regex.compile(r'''
                     (?<hour>\d{1,2}):(?<minute>\d{2})
                     (?:
                         :(?<second>\d{2})
                         (?:\.(?<fraction>\d{1,7}))?
                     )?
                     \s*
                     (?<meridiem>[AaPp][Mm])?
                     ''', flags=regex.VERBOSE | regex.VERSION1)


def _parse_time(text):
    match = TIME.fullmatch(text)
    if match is None:
        return None
    hour = int(match.group('hour'))
    minute = int(match.group('minute'))
    second = int(match.group('second') or 0)
    fraction = match.group('fraction') or ''
    microsecond = int((fraction + '000000')[:6])
    meridiem = match.group('meridiem')
    if meridiem is not None:
        if not 1 <= hour <= 12:
            return None
        hour %= 12
        if meridiem.upper() == 'PM':
            hour += 12
    return hour, minute, second, microsecond


def parse_datetime(text):
    '''
    Parse a date, a time of day, or both, into a naive datetime.

    Dates are M/D/YYYY or YYYY-MM-DD; times are h:mm[:ss[.f]] with an
    optional AM/PM. A time without a date falls on 0001-01-01.
    '''
    text = text.strip()
    match = DATE.match(text)
    if match is None:
        year, month, day = 1, 1, 1
        time = _parse_time(text)
        if time is None:
            return None
    else:
        year, month, day = (int(match.group(name))
                            for name in ('year', 'month', 'day'))
        rest = text[match.end():]
        time = (0, 0, 0, 0)
        if rest:
            # Date and time are separated by whitespace or an ISO "T".
            if not rest[0].isspace() and rest[0] != 'T':
                return None
            time = _parse_time(rest[1:].strip())
            if time is None:
                return None
    try:
        return datetime(year, month, day, *time)
    except ValueError:
        return None


class DateTimeValue(Value):
    '''
    Naive local date and time.
    '''

    __slots__ = ('_value',)
    value_type = ValueType.DATETIME

    START_DELIMITER = '"'
    END_DELIMITER = '"'

    def __init__(self, value):
        self._value = value

    @property
    def value(self):
        return self._value

    def _key(self):
        return self._value

    @classmethod
    def parse(cls, text, settings=None):
        if not text or not text.strip():
            return None
        text = strip_delimiters(text.strip(), cls.START_DELIMITER,
                                cls.END_DELIMITER)
        value = parse_datetime(text)
        return None if value is None else cls(value)

    @property
    def has_date(self):
        return self._value.date() != MIN_DATE

    @property
    def has_time(self):
        return self._value.time() != datetime.min.time()

    def _date(self):
        value = self._value
        return '{}/{}/{:04d}'.format(value.month, value.day, value.year)

    def _time(self):
        value = self._value
        hour = value.hour % 12 or 12
        text = '{}:{:02d}:{:02d}'.format(hour, value.minute, value.second)
        if value.microsecond:
            text += '.' + '{:06d}'.format(value.microsecond).rstrip('0')
        return text + (' PM' if value.hour >= 12 else ' AM')

    def _long(self):
        value = self._value
        return '{}, {} {}, {:04d} {}'.format(
            calendar.day_name[value.weekday()],
            calendar.month_name[value.month], value.day, value.year,
            self._time())

    def _short(self):
        return '{} {}'.format(self._date(), self._time())

    def to_string(self, settings=None):
        if self.has_date and self.has_time:
            return self._short()
        elif self.has_time:
            return self._time()
        return self._date()

    def entry_text(self, settings=None):
        return self.START_DELIMITER + self.to_string(settings) + \
            self.END_DELIMITER

    def display_formats(self, settings=None):
        return [
            DisplayFormat(None, self.to_string(settings)),
            DisplayFormat('Long date/time', self._long()),
            DisplayFormat('Short date/time', self._short()),
        ]

    def add(self, span):
        try:
            return DateTimeValue(self._value + span.value)
        except OverflowError as e:
            raise CalcOverflowError('Date is out of range') from e

    def subtract(self, span):
        return self.add(span.negate())

    def difference(self, other):
        return TimeSpanValue(self._value - other._value)
