'''
Incremental parsing of the entry line into values.
'''

from .lexer import Lexer
from .numeric import ComplexValue, FractionValue
from .operations import parse_value
from .temporal import DateTimeValue, TimeSpanValue
from .value import ValueType


INVALID_SYNTAX = 'Invalid syntax'

# Tried in order for tokens that could be more than one type.
AMBIGUOUS_TYPES = (ValueType.INTEGER, ValueType.TIMESPAN, ValueType.DOUBLE)

NEGATABLE_TYPES = (ValueType.INTEGER, ValueType.DOUBLE, ValueType.FRACTION,
                   ValueType.TIMESPAN)


def _has_fraction_separator(text):
    return (FractionValue.ENTRY_SEPARATOR in text or
            FractionValue.DISPLAY_SEPARATOR in text)


class EntryLineParser:
    '''
    Parse an entry line, possibly still being typed, into values.

    Besides the values, tells whether the line is complete, and whether it
    ends partway through a complex number, a date, or a number whose sign
    could be toggled.
    '''

    def __init__(self, entry_line='', settings=None, lexer=None):
        self.settings = settings
        self.lexer = lexer or Lexer()
        self.entry_line = entry_line

    @property
    def entry_line(self):
        return self._entry_line

    @entry_line.setter
    def entry_line(self, text):
        self._entry_line = text or ''
        self.tokens = list(self.lexer.lex(self._entry_line))
        self.values = []
        self.error_message = ''
        self._parse()
        self._set_states()

    @property
    def has_error(self):
        return bool(self.error_message)

    @property
    def error_location(self):
        '''
        Return (start, length) of the token that didn't parse, or None.
        '''
        if not self.has_error or len(self.values) >= len(self.tokens):
            return None
        token = self.tokens[len(self.values)]
        return token.start, len(token.text)

    def _parse_token(self, token):
        text = token.text
        if token.value_type is not None:
            return parse_value(token.value_type, text, self.settings)
        elif _has_fraction_separator(text):
            return FractionValue.parse(text, self.settings)
        for value_type in AMBIGUOUS_TYPES:
            value = parse_value(value_type, text, self.settings)
            if value is not None:
                return value
        return None

    def _parse(self):
        for token in self.tokens:
            value = self._parse_token(token)
            if value is None:
                self.error_message = INVALID_SYNTAX
                break
            self.values.append(value)

    def _set_states(self):
        self.in_complex = False
        self.in_datetime = False
        self.in_negatable_scalar_value = False
        parsed = len(self.values) == len(self.tokens)
        self.is_complete = parsed
        if not self.tokens:
            return

        text = self.tokens[-1].text
        if (text[0] == ComplexValue.START_DELIMITER and
                text[-1] != ComplexValue.END_DELIMITER):
            self.in_complex = True
            self.is_complete = False
        elif (text[0] == DateTimeValue.START_DELIMITER and
                (len(text) == 1 or
                 text[-1] != DateTimeValue.END_DELIMITER)):
            self.in_datetime = True
            self.is_complete = False
        elif not self._entry_line[-1].isspace():
            if parsed:
                negatable = self.values[-1].value_type in NEGATABLE_TYPES
            else:
                negatable = (_has_fraction_separator(text) or
                             TimeSpanValue.SEPARATOR in text)
            self.in_negatable_scalar_value = negatable

    def __repr__(self):
        return 'EntryLineParser({!r})'.format(self._entry_line)
