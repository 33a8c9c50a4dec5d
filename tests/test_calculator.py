'''
Calculator state, error translation, history and persistence tests
'''

import logging

from rpncalc.calculator import Calculator, error_message
from rpncalc.commands import Commands
from rpncalc.history import EntryLineHistory
from rpncalc.nodes import MemoryNode
from rpncalc.numeric import DoubleValue, IntegerValue
from rpncalc.settings import BinaryFormat, DisplaySettings
from rpncalc.util import ArgumentOutOfRangeError, CalcOverflowError, \
    DivideByZeroError, InvalidOperationError, NotFiniteNumberError, \
    UnknownCommandError


class Broken(Commands):

    def forgetful(self, command):
        '''
        Neither commits nor cancels.
        '''

    def crash(self, command):
        raise KeyError('oops')

    COMMANDS = {
        'Add': forgetful,
        'Crash': crash,
    }


def test_unknown_command(calculator):
    result = calculator.execute_command('Foo')
    assert not result.ok
    assert isinstance(result.error, UnknownCommandError)
    assert calculator.error_message == 'Foo: Unknown command'
    calculator.execute_command('Swap', 2)
    assert calculator.error_message == 'Swap(2): Unknown command'


def test_has_command(calculator):
    assert calculator.has_command('Add')
    assert calculator.has_command('Pick')
    assert calculator.has_command('Pick', 1)
    assert calculator.has_command('AppendToEntryLine', 0)
    assert not calculator.has_command('AppendToEntryLine')
    assert not calculator.has_command('add')


def test_open_command_is_internal_error(calculator, caplog):
    calculator.command_groups.insert(0, Broken(calculator))
    calculator.stack.push_range([IntegerValue(1), IntegerValue(2)])
    with caplog.at_level(logging.ERROR, logger='rpncalc.calculator'):
        result = calculator.execute_command('Add')
    assert not result.ok
    assert calculator.error_message == 'Internal error: CommandStateError'
    assert [record.levelno for record in caplog.records] == [logging.ERROR]
    assert len(calculator.stack) == 2
    assert calculator.last_command is None


def test_unexpected_exception_is_internal_error(calculator, caplog):
    calculator.command_groups.insert(0, Broken(calculator))
    with caplog.at_level(logging.ERROR, logger='rpncalc.calculator'):
        result = calculator.execute_command('Crash')
    assert isinstance(result.error, KeyError)
    assert calculator.error_message == 'Internal error: KeyError'
    assert caplog.records[0].exc_info is not None


def test_error_messages():
    assert error_message(DivideByZeroError()) == 'Divide by zero'
    assert error_message(ZeroDivisionError('float division')) == \
        'Divide by zero'
    assert error_message(NotFiniteNumberError()) == \
        'Result is not a finite number'
    assert error_message(ArgumentOutOfRangeError('x')) == \
        'Argument out of range: x'
    assert error_message(CalcOverflowError('too big')) == 'Overflow: too big'
    assert error_message(InvalidOperationError('nope')) == 'nope'
    assert error_message(ValueError('bad')) == 'bad'
    assert error_message(UnknownCommandError('Foo')) is None
    assert error_message(KeyError('x')) is None


def test_last_command_only_when_committed(rpn, calculator):
    rpn('1', '2', 'Add')
    committed = calculator.last_command
    assert committed is not None
    rpn('5')
    rpn('Edit')
    assert calculator.last_command is not committed
    calculator.entry_line = 'x'
    rpn('Edit')
    rpn('Add')
    # Failed and cancelled commands leave Last alone.
    assert calculator.last_command.last_args == [IntegerValue(5)]


def test_last_after_failure(rpn, calculator):
    rpn('1', '2', 'Add', '0', 'Divide', 'Last')
    assert list(calculator.stack) == [IntegerValue(2), IntegerValue(1),
                                      IntegerValue(0), IntegerValue(3)]


def test_save_twice_into_one_node(rpn, calculator):
    node = MemoryNode()
    rpn('1', '2', '3')
    calculator.save(node)
    rpn('Drop', 'Drop', '4')
    calculator.save(node)

    loaded = Calculator()
    loaded.load(node)
    assert list(loaded.stack) == [IntegerValue(4), IntegerValue(1)]
    assert list(loaded.entry_line_history) == ['4', '3', '2', '1']
    calculator.entry_line_history.clear()
    calculator.save(node)
    assert node.get_node('EntryLineHistory').get_nodes() == []


def test_history_scroll():
    history = EntryLineHistory()
    for line in ['a', 'b', 'c']:
        history.add(line)
    assert list(history) == ['c', 'b', 'a']
    assert history.scroll(True, '') == 'c'
    assert history.scroll(True, 'c') == 'b'
    assert history.scroll(True, 'b') == 'a'
    assert history.scroll(True, 'a') is None
    assert history.scroll(False, 'a') == 'b'
    assert history.scroll(False, 'edited') is None


def test_history_limit_and_dedupe():
    history = EntryLineHistory()
    for number in range(12):
        history.add(str(number))
    history.add('5')
    assert len(history) == 10
    assert history[0] == '5'
    assert list(history).count('5') == 1


def test_calculator_scroll_history(rpn, calculator):
    rpn('1', '2')
    assert calculator.scroll_history(True) == '2'
    assert calculator.entry_line == '2'
    assert calculator.scroll_history(True) == '1'
    assert calculator.scroll_history(False) == '2'
    assert calculator.entry_line == '2'


def test_save_load():
    calculator = Calculator(DisplaySettings(
        binary_word_size=16, binary_format=BinaryFormat.HEXADECIMAL))
    calculator.stack.push_range([IntegerValue(1), DoubleValue(2.5)])
    calculator.entry_line_history.add('1 2.5')
    calculator.entry_line = 'Pi'
    node = MemoryNode()
    calculator.save(node)
    data = node.to_dict()
    assert data['values']['BinaryWordSize'] == '16'
    assert data['values']['BinaryFormat'] == 'HEXADECIMAL'

    loaded = Calculator()
    loaded.load(MemoryNode.from_dict(data))
    assert loaded.settings.binary_word_size == 16
    assert loaded.settings.binary_format is BinaryFormat.HEXADECIMAL
    assert list(loaded.stack) == [DoubleValue(2.5), IntegerValue(1)]
    assert loaded.entry_line == 'Pi'
    assert list(loaded.entry_line_history) == ['1 2.5']
    assert loaded.last_command is None


def test_load_out_of_range_setting(caplog):
    calculator = Calculator()
    node = MemoryNode.from_dict({'values': {'BinaryWordSize': '99',
                                            'AngleMode': 'RADIANS'}})
    with caplog.at_level(logging.WARNING, logger='rpncalc.calculator'):
        calculator.load(node)
    assert calculator.settings.binary_word_size == 64
    assert calculator.settings.angle_mode.value == 'radians'
    assert len(caplog.records) == 1
