'''
Commands that move text between the entry line and the stack.
'''

from ..command import CommandState
from ..parser import EntryLineParser
from .base import Commands


class EntryCommands(Commands):

    def __init__(self, calculator, stack_commands):
        super().__init__(calculator)
        self.stack_commands = stack_commands

    def append_to_entry_line(self, command, offset):
        '''
        Append the entry text of the value at offset to the entry line.
        '''
        self.require_non_negative_count(offset)
        self.require_args(offset + 1)
        value = self.stack.peek_at(offset)
        text = value.entry_text(self.settings)
        calculator = self.calculator
        if calculator.entry_line:
            calculator.entry_line += ' ' + text
        else:
            calculator.entry_line = text
        command.commit()
        command.set_last_args([value])

    def edit(self, command):
        '''
        Move the top value into an empty entry line.
        '''
        if self.calculator.entry_line:
            command.cancel()
            return
        self.require_args(1)
        value = command.use_top_value()
        self.calculator.entry_line = value.entry_text(self.settings)
        command.commit()

    def enter(self, command):
        '''
        Push the values on the entry line, or duplicate the top if it's empty.

        Return the parser, or None if the line was empty.
        '''
        calculator = self.calculator
        line = calculator.entry_line
        if not line:
            self.stack_commands.dup(command)
            return None
        parser = EntryLineParser(line, self.settings)
        calculator.entry_line_history.add(line)
        if parser.has_error:
            calculator.error_message = parser.error_message
            command.cancel()
        else:
            # Entering values isn't something Last can undo.
            command.push_results(CommandState.CANCELLED, parser.values)
            calculator.entry_line = ''
        return parser

    def last(self, command):
        '''
        Push back the arguments of the last committed command.
        '''
        self.calculator.push_last_args()
        command.cancel()

    COMMANDS = {
        'Edit': edit,
        'Enter': enter,
        'Last': last,
    }

    PARAMETRIZED_COMMANDS = {
        'AppendToEntryLine': append_to_entry_line,
    }
