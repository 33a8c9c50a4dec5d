'''
The calculator: settings, stack, entry line and the commands that act on them.
'''

from collections import namedtuple
import logging

from .command import Command, CommandState
from .commands import command_groups
from .history import EntryLineHistory
from .settings import DisplaySettings
from .stack import ValueStack
from .util import ArgumentOutOfRangeError, CommandStateError, \
    NotFiniteNumberError, RPNError, UnknownCommandError


logger = logging.getLogger(__name__)


class CommandResult(namedtuple('CommandResult', 'value error')):
    '''
    What a command returned, or the error it failed with.
    '''

    __slots__ = ()

    @property
    def ok(self):
        return self.error is None


# Node value names of the saved settings.
SAVED_SETTINGS = {
    'AngleMode': 'angle_mode',
    'BinaryFormat': 'binary_format',
    'BinaryWordSize': 'binary_word_size',
    'ComplexFormat': 'complex_format',
    'DecimalFormat': 'decimal_format',
    'FixedDecimalDigits': 'fixed_decimal_digits',
    'FractionFormat': 'fraction_format',
}

INTEGRATION_ERRORS = (UnknownCommandError, CommandStateError)


def describe(name, parameter=None):
    return name if parameter is None else '{}({})'.format(name, parameter)


def error_message(error):
    '''
    Return the message to show the user for an error a command raised.

    Return None for errors that point at a bug rather than bad input.
    '''
    if isinstance(error, INTEGRATION_ERRORS):
        return None
    elif isinstance(error, ZeroDivisionError):
        return 'Divide by zero'
    elif isinstance(error, NotFiniteNumberError):
        return 'Result is not a finite number'
    elif isinstance(error, ArgumentOutOfRangeError):
        return 'Argument out of range: {}'.format(error)
    elif isinstance(error, OverflowError):
        return 'Overflow: {}'.format(error)
    elif isinstance(error, (RPNError, ValueError, ArithmeticError)):
        return str(error)
    return None


class Calculator:
    '''
    Owns the state commands act on, and runs commands by name.

    execute_command() is the only way commands run. It never raises: a
    failed command leaves the stack as it was and sets error_message.
    '''

    def __init__(self, settings=None):
        self.settings = settings if settings is not None \
            else DisplaySettings()
        self.stack = ValueStack()
        self.entry_line = ''
        self.entry_line_history = EntryLineHistory()
        self.error_message = ''
        self.last_command = None
        self.command_groups = command_groups(self)

    def clear_error(self):
        self.error_message = ''

    @property
    def has_error(self):
        return bool(self.error_message)

    def find_command(self, name, parameter=None):
        for group in self.command_groups:
            action = group.find_command(name, parameter)
            if action is not None:
                return action
        return None

    def has_command(self, name, parameter=None):
        return self.find_command(name, parameter) is not None

    def execute_command(self, name, parameter=None):
        '''
        Run the named command in its own transaction.

        Return a CommandResult holding whatever the command returned, or
        the error it failed with.
        '''
        self.clear_error()
        label = describe(name, parameter)
        action = self.find_command(name, parameter)
        if action is None:
            self.error_message = '{}: Unknown command'.format(label)
            logger.debug(self.error_message)
            return CommandResult(None, UnknownCommandError(label))

        logger.debug('Executing %s', label)
        command = Command(self)
        try:
            value = action(command)
            if command.state is CommandState.OPEN:
                raise CommandStateError(
                    '{} neither committed nor cancelled'.format(label))
        except Exception as e:
            self._fail(label, e)
            return CommandResult(None, e)

        if command.state is CommandState.COMMITTED:
            self.last_command = command
        return CommandResult(value, None)

    def _fail(self, label, error):
        message = error_message(error)
        if message is None:
            logger.error('%s failed', label, exc_info=error)
            message = 'Internal error: {}'.format(type(error).__name__)
        else:
            logger.debug('%s failed: %s', label, message)
        self.error_message = message

    def push_last_args(self):
        '''
        Push back the arguments of the last committed command.
        '''
        if self.last_command is not None:
            self.last_command.push_last_args()

    def scroll_history(self, up):
        '''
        Replace the entry line with an older (up) or newer history entry.

        Return the new entry line, or None if there was nowhere to scroll.
        '''
        line = self.entry_line_history.scroll(up, self.entry_line)
        if line is not None:
            self.entry_line = line
        return line

    def load(self, node):
        '''
        Restore settings, entry line, stack and history saved by save().
        '''
        settings = self.settings
        for name, attribute in SAVED_SETTINGS.items():
            try:
                setattr(settings, attribute,
                        node.get_value(name, getattr(settings, attribute)))
            except ArgumentOutOfRangeError:
                logger.warning('Ignoring saved %s out of range', name)
        self.entry_line = node.get_value('EntryLine', '')
        self.stack.load(node.get_node('Stack'), settings)
        self.entry_line_history.load(node.get_node('EntryLineHistory'))
        self.last_command = None

    def save(self, node):
        settings = self.settings
        for name, attribute in SAVED_SETTINGS.items():
            node.set_value(name, getattr(settings, attribute))
        node.set_value('EntryLine', self.entry_line)
        self.stack.save(node.get_node('Stack', create=True), settings)
        self.entry_line_history.save(node.get_node('EntryLineHistory',
                                                   create=True))

    def __repr__(self):
        return 'Calculator(stack={!r}, entry_line={!r})'.format(
            self.stack, self.entry_line)
