'''
Command tests, run through the calculator the way the CLI runs them
'''

from datetime import datetime, timedelta

from pytest import approx, raises

from rpncalc.commands import Commands
from rpncalc.numeric import MASK64, BinaryValue, ComplexValue, DoubleValue, \
    FractionValue, IntegerValue
from rpncalc.temporal import DateTimeValue, TimeSpanValue
from rpncalc.util import InvalidOperationError


def top(calculator):
    return calculator.stack.peek()


def integers(*values):
    return [IntegerValue(value) for value in values]


# Stack


def test_add(rpn, calculator):
    assert rpn('3', '4', 'Add').ok
    assert list(calculator.stack) == integers(7)


def test_divide_by_zero_leaves_stack(rpn, calculator):
    result = rpn('1', '0', 'Divide')
    assert not result.ok
    assert calculator.error_message == 'Divide by zero'
    assert list(calculator.stack) == integers(0, 1)


def test_missing_arguments(rpn, calculator):
    assert not rpn('Add').ok
    assert calculator.error_message == 'Two arguments are required.'


def test_matching_types_required(rpn, calculator):
    commands = Commands(calculator)
    rpn('1', '2.5')
    with raises(InvalidOperationError,
                match=r'^Items 1 and 2 must have the same type\.$'):
        commands.require_matching_types(0, 1)
    rpn('3.5')
    commands.require_matching_types(0, 1)
    with raises(InvalidOperationError, match=r'^Items 2 and 3 '):
        commands.require_matching_types(1, 2)


def test_error_cleared_by_next_command(rpn, calculator):
    rpn('Add')
    assert calculator.has_error
    rpn('1')
    assert not calculator.has_error


def test_swap_drop_last(rpn, calculator):
    rpn('1', '2', 'Swap', 'Drop', 'Last')
    assert list(calculator.stack) == integers(1, 2)


def test_last_without_history(rpn, calculator):
    assert rpn('Last').ok
    assert len(calculator.stack) == 0


def test_clear(rpn, calculator):
    rpn('1 2 3', 'Clear')
    assert len(calculator.stack) == 0
    rpn('Last')
    assert list(calculator.stack) == integers(3, 2, 1)


def test_roll_up3(rpn, calculator):
    rpn('1 2 3', 'RollUp3')
    assert list(calculator.stack) == integers(1, 3, 2)


def test_roll_down_n(rpn, calculator):
    rpn('1 2 3 3', 'RollDownN')
    assert list(calculator.stack) == integers(2, 1, 3)


def test_drop_n(rpn, calculator):
    rpn('1 2 3 2', 'DropN')
    assert list(calculator.stack) == integers(1)


def test_drop_n_too_many(rpn, calculator):
    assert not rpn('1 5', 'DropN').ok
    assert list(calculator.stack) == integers(5, 1)


def test_dup_n(rpn, calculator):
    rpn('1 2 2', 'DupN')
    assert list(calculator.stack) == integers(2, 1, 2, 1)


def test_dup_with_parameter(calculator, rpn):
    rpn('1 2')
    assert calculator.execute_command('DupN', 2).ok
    assert list(calculator.stack) == integers(2, 1, 2, 1)


def test_enter_empty_line_duplicates(rpn, calculator):
    rpn('5', '')
    assert list(calculator.stack) == integers(5, 5)


def test_pick(rpn, calculator):
    rpn('10 20 30', '2', 'Pick')
    assert list(calculator.stack) == integers(20, 30, 20, 10)


def test_pick_offset(rpn, calculator):
    rpn('10 20 30')
    calculator.execute_command('Pick', 0)
    assert top(calculator) == IntegerValue(30)
    calculator.execute_command('Pick', 3)
    assert top(calculator) == IntegerValue(10)


def test_pick_position_must_be_positive(rpn, calculator):
    assert not rpn('10', '0', 'Pick').ok
    assert calculator.error_message == 'Stack position must be positive.'


def test_remove(rpn, calculator):
    rpn('1 2 3')
    assert calculator.execute_command('Remove', 1).ok
    assert list(calculator.stack) == integers(3, 1)
    rpn('Last')
    assert list(calculator.stack) == integers(2, 3, 1)


def test_sort_n(rpn, calculator):
    rpn('3 1 2 3', 'SortN')
    assert list(calculator.stack) == integers(3, 2, 1)


def test_sigma(rpn, calculator):
    rpn('1 2 3')
    calculator.execute_command('SigmaN', 3)
    assert list(calculator.stack) == integers(6)


def test_sigma_n_mixed_types(rpn, calculator):
    rpn('1 1/2 2', 'SigmaN')
    assert list(calculator.stack) == [FractionValue(3, 2)]


def test_keep(rpn, calculator):
    rpn('1 2 3')
    calculator.execute_command('KeepN', 1)
    assert list(calculator.stack) == integers(3)


def test_negative_count(rpn, calculator):
    rpn('1 2 3')
    assert not calculator.execute_command('DropN', -1).ok
    assert calculator.error_message == 'Count must be non-negative.'
    assert len(calculator.stack) == 3


# Entry line


def test_enter_invalid_syntax(rpn, calculator):
    rpn('9')
    rpn('1 abc')
    assert calculator.error_message == 'Invalid syntax'
    assert calculator.entry_line == '1 abc'
    assert list(calculator.stack) == integers(9)


def test_enter_non_finite_keeps_line(rpn, calculator):
    rpn('9')
    assert not rpn('1e400').ok
    assert calculator.error_message == 'Result is not a finite number'
    assert calculator.entry_line == '1e400'
    assert list(calculator.stack) == integers(9)
    assert list(calculator.entry_line_history) == ['1e400', '9']


def test_enter_adds_history(rpn, calculator):
    rpn('1', '2 3')
    assert list(calculator.entry_line_history) == ['2 3', '1']


def test_edit(rpn, calculator):
    rpn('3/2', 'Edit')
    assert calculator.entry_line == '1_1_2'
    assert len(calculator.stack) == 0


def test_edit_with_entry_line_cancels(rpn, calculator):
    rpn('1')
    calculator.entry_line = '2'
    assert calculator.execute_command('Edit').ok
    assert calculator.entry_line == '2'
    assert list(calculator.stack) == integers(1)


def test_append_to_entry_line(rpn, calculator):
    rpn('1 2.5')
    calculator.execute_command('AppendToEntryLine', 1)
    assert calculator.entry_line == '1'
    calculator.execute_command('AppendToEntryLine', 0)
    assert calculator.entry_line == '1 2.5'
    assert len(calculator.stack) == 2


# Math


def test_power(rpn, calculator):
    rpn('6', '2', 'Power')
    assert list(calculator.stack) == integers(36)


def test_negative_power_is_fraction(rpn, calculator):
    rpn('2', '-2', 'Power')
    assert top(calculator) == FractionValue(1, 4)


def test_subtract_order(rpn, calculator):
    rpn('10', '4', 'Subtract')
    assert top(calculator) == IntegerValue(6)


def test_integer_division_is_exact(rpn, calculator):
    rpn('1', '3', 'Divide')
    assert top(calculator) == FractionValue(1, 3)
    rpn('3', 'Multiply')
    assert top(calculator) == IntegerValue(1)


def test_square_root_of_negative(rpn, calculator):
    rpn('(0,8)', 'Square')
    assert top(calculator) == IntegerValue(-64)
    rpn('Sqrt')
    assert top(calculator) == ComplexValue(0, 8)


def test_complex_square_root_squares_back(rpn, calculator):
    rpn('(0,8)', 'Sqrt')
    assert top(calculator) == ComplexValue(2, 2)
    rpn('Square')
    assert top(calculator) == ComplexValue(0, 8)


def test_square_root_of_negative_fraction(rpn, calculator):
    rpn('-1/4', 'Sqrt')
    assert top(calculator) == ComplexValue(0, 0.5)


def test_trig_degrees(rpn, calculator):
    rpn('90', 'Sin')
    assert top(calculator) == IntegerValue(1)
    rpn('180', 'Sin')
    assert top(calculator) == IntegerValue(0)
    rpn('60', 'Cos')
    assert top(calculator).value == approx(0.5)


def test_tan_of_right_angle(rpn, calculator):
    assert not rpn('90', 'Tan').ok
    assert calculator.error_message == 'Result is not a finite number'
    assert list(calculator.stack) == integers(90)


def test_inverse_trig(rpn, calculator):
    rpn('1', 'ASin')
    assert top(calculator).to_double() == approx(90)


def test_trig_radians(rpn, calculator):
    calculator.settings.angle_mode = 'radians'
    rpn('Pi', 'Cos')
    assert top(calculator) == IntegerValue(-1)


def test_logarithms(rpn, calculator):
    rpn('100', 'Log')
    assert top(calculator) == IntegerValue(2)
    rpn('3', 'ALog')
    assert top(calculator) == IntegerValue(1000)
    rpn('0', 'Exp')
    assert top(calculator) == IntegerValue(1)


def test_log_of_negative(rpn, calculator):
    assert not rpn('-1', 'Ln').ok
    assert calculator.error_message == 'Result is not a finite number'


def test_complex_log(rpn, calculator):
    rpn('(0,1)', 'Ln')
    value = top(calculator)
    assert isinstance(value, ComplexValue)
    assert value.real == 0
    assert value.imaginary == approx(1.5707963267948966)


def test_factorial(rpn, calculator):
    rpn('5', 'Fact')
    assert top(calculator) == IntegerValue(120)


def test_factorial_of_negative(rpn, calculator):
    assert not rpn('-1', 'Fact').ok
    assert calculator.error_message == \
        'Argument out of range: Factorial requires a non-negative integer'


def test_factorial_of_non_integer(rpn, calculator):
    assert not rpn('2.5', 'Fact').ok
    assert calculator.error_message == 'An integer is required.'


def test_comb_perm(rpn, calculator):
    rpn('5', '2', 'Comb')
    assert top(calculator) == IntegerValue(10)
    rpn('5', '2', 'Perm')
    assert top(calculator) == IntegerValue(20)


def test_comb_out_of_range(rpn, calculator):
    assert not rpn('2', '5', 'Comb').ok
    assert calculator.error_message.startswith('Argument out of range')


def test_percentages(rpn, calculator):
    rpn('200', '15', 'Percent')
    assert top(calculator) == IntegerValue(30)
    rpn('50', '75', 'PercentChange')
    assert top(calculator) == IntegerValue(50)
    rpn('200', '50', 'PercentTotal')
    assert top(calculator) == IntegerValue(25)


def test_round_trunc(rpn, calculator):
    rpn('3.14159', '2', 'Round')
    assert top(calculator).value == approx(3.14)
    rpn('-2.75', '1', 'Trunc')
    assert top(calculator).value == approx(-2.7)
    rpn('2.5', '0', 'Round')
    assert top(calculator) == IntegerValue(3)


def test_parts(rpn, calculator):
    rpn('-2.5', 'Int')
    assert top(calculator) == IntegerValue(-2)
    rpn('-2.5', 'Floor')
    assert top(calculator) == IntegerValue(-3)
    rpn('-2.5', 'Ceil')
    assert top(calculator) == IntegerValue(-2)
    rpn('7/2', 'Frac')
    assert top(calculator) == FractionValue(1, 2)


def test_hypotenuse(rpn, calculator):
    rpn('3', '4', 'Hyp')
    assert top(calculator) == IntegerValue(5)


def test_gcd_lcm(rpn, calculator):
    rpn('12', '18', 'Gcd')
    assert top(calculator) == IntegerValue(6)
    rpn('12', '18', 'Lcm')
    assert top(calculator) == IntegerValue(36)


def test_modulus_sign(rpn, calculator):
    rpn('7', '3', 'Mod')
    assert top(calculator) == IntegerValue(1)
    rpn('-7', '3', 'Mod')
    assert top(calculator) == IntegerValue(-1)


def test_max_min(rpn, calculator):
    rpn('3', '5', 'Max')
    assert top(calculator) == IntegerValue(5)
    rpn('3', '5', 'Min')
    assert top(calculator) == IntegerValue(3)


def test_abs_sign(rpn, calculator):
    rpn('(3,4)', 'Abs')
    assert top(calculator) == IntegerValue(5)
    rpn('-2.5', 'Sign')
    assert top(calculator) == IntegerValue(-1)
    rpn('-1:00', 'Abs')
    assert top(calculator) == TimeSpanValue(timedelta(minutes=1))


def test_invert(rpn, calculator):
    rpn('4', 'Invert')
    assert top(calculator) == FractionValue(1, 4)


def test_xroot(rpn, calculator):
    rpn('27', '3', 'XRoot')
    assert top(calculator).to_double() == approx(3)


def test_negate(rpn, calculator):
    rpn('1:30', 'Negate')
    assert top(calculator) == TimeSpanValue(timedelta(minutes=-1, seconds=-30))


def test_random_seed(rpn, calculator):
    rpn('42', 'SetRandomSeed', 'Random', '42', 'SetRandomSeed', 'Random')
    first, second = list(calculator.stack)
    assert first == second
    assert 0 <= first.to_double() < 1


def test_random_between(rpn, calculator):
    rpn('10', '20', 'RandomBetween')
    assert 10 <= top(calculator).to_double() <= 20


def test_angle_conversions(rpn, calculator):
    rpn('180', 'DtoR')
    assert top(calculator).value == approx(3.141592653589793)
    rpn('RtoD')
    assert top(calculator).to_double() == approx(180)


# Binary


def test_not_within_word_size(rpn, calculator):
    calculator.settings.binary_word_size = 8
    rpn('#255d', 'Not', 'BtoI')
    assert top(calculator) == IntegerValue(0)


def test_bitwise(rpn, calculator):
    rpn('#12d', '#10d', 'And')
    assert top(calculator) == BinaryValue(8)
    rpn('#12d', '#10d', 'Or')
    assert top(calculator) == BinaryValue(14)
    rpn('#12d', '#10d', 'Xor')
    assert top(calculator) == BinaryValue(6)


def test_shift_rotate(rpn, calculator):
    rpn('#1d', '4', 'ShiftLeft')
    assert top(calculator) == BinaryValue(16)
    rpn('1', 'ShiftRight')
    assert top(calculator) == BinaryValue(8)
    calculator.settings.binary_word_size = 8
    rpn('#1d', '1', 'RotateRight')
    assert top(calculator) == BinaryValue(128)
    rpn('1', 'RotateLeft')
    assert top(calculator) == BinaryValue(1)


def test_integer_to_binary(rpn, calculator):
    rpn('-1', 'ItoB')
    assert top(calculator) == BinaryValue(MASK64)


def test_bitwise_needs_binary(rpn, calculator):
    assert not rpn('1', '2', 'And').ok
    assert calculator.error_message == 'Item 1 must have type Binary.'


# Fraction


def test_fraction_to_parts(rpn, calculator):
    rpn('3/4', 'FtoR')
    assert list(calculator.stack) == integers(4, 3)


def test_parts_to_fraction(rpn, calculator):
    rpn('6', '4', 'RtoF')
    assert top(calculator) == FractionValue(3, 2)


def test_double_fraction(rpn, calculator):
    rpn('0.75', 'DtoF')
    assert top(calculator) == FractionValue(3, 4)
    rpn('FtoD')
    assert top(calculator) == DoubleValue(0.75)


# TimeSpan


def test_from_hours(rpn, calculator):
    rpn('1.5', 'FromHr')
    assert top(calculator) == TimeSpanValue(timedelta(hours=1, minutes=30))


def test_to_minutes(rpn, calculator):
    rpn('1:30:00', 'ToMin')
    assert top(calculator) == IntegerValue(90)
    rpn('0:0:45', 'ToSec')
    assert top(calculator) == IntegerValue(45)


def test_duration_out_of_range(rpn, calculator):
    assert not rpn('MaxDouble', 'FromSec').ok
    assert calculator.error_message.startswith('Overflow')


def test_timespan_arithmetic(rpn, calculator):
    rpn('1:00', '3', 'Multiply')
    assert top(calculator) == TimeSpanValue(timedelta(minutes=3))
    rpn('"1/1/2020"', '1.00:00:00', 'Add')
    assert top(calculator) == DateTimeValue(datetime(2020, 1, 2))


# DateTime


def test_weekday(rpn, calculator):
    rpn('"3/4/2021"', 'Weekday')
    assert top(calculator) == IntegerValue(5)


def test_day_of_year(rpn, calculator):
    rpn('"3/4/2021"', 'DayOfYear')
    assert top(calculator) == IntegerValue(63)


def test_age_on(rpn, calculator):
    rpn('"6/15/2000"', '"6/14/2020"', 'AgeOn')
    assert top(calculator) == IntegerValue(19)
    rpn('"6/15/2000"', '"6/15/2020"', 'AgeOn')
    assert top(calculator) == IntegerValue(20)


def test_date_and_time_parts(rpn, calculator):
    rpn('"3/4/2021 1:30 PM"', 'TimePart')
    assert top(calculator) == TimeSpanValue(timedelta(hours=13, minutes=30))
    rpn('"3/4/2021 1:30 PM"', 'DatePart')
    assert top(calculator) == DateTimeValue(datetime(2021, 3, 4))


def test_date_difference(rpn, calculator):
    rpn('"3/4/2021"', '"3/1/2021"', 'Subtract')
    assert top(calculator) == TimeSpanValue(timedelta(days=3))


def test_today(rpn, calculator):
    rpn('Date')
    value = top(calculator).value
    assert (value.hour, value.minute, value.second) == (0, 0, 0)


# Constants


def test_constants(rpn, calculator):
    rpn('Pi')
    assert top(calculator) == DoubleValue(3.141592653589793)
    rpn('MaxLong')
    assert top(calculator) == IntegerValue(2 ** 63 - 1)
    rpn('MaxDate')
    assert top(calculator).value.year == 9999


# Complex


def test_complex_parts(rpn, calculator):
    rpn('3', '4', 'RtoC')
    assert top(calculator) == ComplexValue(3, 4)
    rpn('Real')
    assert top(calculator) == IntegerValue(3)
    rpn('(3,4)', 'Imag')
    assert top(calculator) == IntegerValue(4)
    rpn('(3,4)', 'Conj')
    assert top(calculator) == ComplexValue(3, -4)


def test_complex_to_parts(rpn, calculator):
    rpn('(3,4)', 'CtoR')
    assert list(calculator.stack) == integers(4, 3)


def test_phase(rpn, calculator):
    rpn('(0,2)', 'Phase')
    assert top(calculator).to_double() == approx(90)


def test_i_squared(rpn, calculator):
    rpn('I', 'Square')
    assert top(calculator) == IntegerValue(-1)
