'''
Entry line parser tests
'''

from datetime import datetime

from rpncalc.numeric import ComplexValue, DoubleValue, FractionValue, \
    IntegerValue
from rpncalc.parser import EntryLineParser
from rpncalc.temporal import DateTimeValue, TimeSpanValue


def test_values(settings):
    p = EntryLineParser('1 2.5 3/4 1:30 (1,2) "1/2/2020"', settings)
    assert p.is_complete
    assert not p.has_error
    assert [value.value_type for value in p.values] == [
        IntegerValue.value_type, DoubleValue.value_type,
        FractionValue.value_type, TimeSpanValue.value_type,
        ComplexValue.value_type, DateTimeValue.value_type,
    ]
    assert p.values[-1] == DateTimeValue(datetime(2020, 1, 2))


def test_empty():
    p = EntryLineParser('')
    assert p.values == []
    assert p.is_complete
    assert not p.has_error
    assert not p.in_negatable_scalar_value


def test_unfinished_complex():
    p = EntryLineParser('(3,4')
    assert p.in_complex
    assert not p.is_complete
    assert not p.has_error
    assert p.values == [ComplexValue(3, 4)]


def test_unfinished_datetime():
    p = EntryLineParser('1 "')
    assert p.in_datetime
    assert not p.is_complete
    assert p.has_error


def test_negatable():
    assert EntryLineParser('12').in_negatable_scalar_value
    assert EntryLineParser('1/2').in_negatable_scalar_value
    assert EntryLineParser('1:30').in_negatable_scalar_value
    assert not EntryLineParser('12 ').in_negatable_scalar_value
    assert not EntryLineParser('#12').in_negatable_scalar_value


def test_negatable_while_unparsed():
    p = EntryLineParser('1_')
    assert p.has_error
    assert p.in_negatable_scalar_value


def test_error_location():
    p = EntryLineParser('1 abc 3')
    assert p.error_message == 'Invalid syntax'
    assert p.error_location == (2, 3)
    assert p.values == [IntegerValue(1)]
    assert not p.is_complete


def test_reparse_on_assignment():
    p = EntryLineParser('abc')
    assert p.has_error
    p.entry_line = '7'
    assert not p.has_error
    assert p.values == [IntegerValue(7)]
