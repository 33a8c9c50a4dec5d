from os import isatty, path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
import regex

from .calculator import Calculator
from .lexer import Lexer
from .parser import EntryLineParser
from .settings import AngleMode, BinaryFormat, ComplexFormat, \
    DecimalFormat, DisplaySettings, FractionFormat
from .util import ArgumentError


# Command names, optionally with an int argument, e.g. Swap or Pick(2).
COMMAND = regex.compile(r'''
                        (?<name>[A-Za-z]\w*)
                        (?:
                            \(
                            (?<parameter>-?\d+)
                            \)
                        )?
                        ''', flags=regex.VERBOSE | regex.VERSION1)


def _enum_option(enum):
    '''
    Return (type, choices) for an option naming a member of enum.
    '''
    def convert(text):
        try:
            return enum[text.upper()]
        except KeyError:
            return text
    return convert, list(enum)


class InteractiveInput:
    '''
    Lines typed at a prompt, starting from whatever is on the entry line.

    The stack depth shows on the right, and the last error at the bottom.
    '''

    def __init__(self, prompt, calculator, history_file=None):
        self.prompt = prompt
        self.calculator = calculator
        self.history_file = history_file

    def _stack_depth(self):
        return str(len(self.calculator.stack))

    def _error(self):
        return self.calculator.error_message or None

    def __iter__(self):
        calculator = self.calculator
        history = None
        if self.history_file is not None:
            history = FileHistory(path.expanduser(self.history_file))
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=history,
                                    rprompt=self._stack_depth,
                                    bottom_toolbar=self._error,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Debatable. Interferes with X11 selection.
                                    mouse_support=True,
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                line = session.prompt(default=calculator.entry_line)
                # The prompt started from the entry line, so it's in line now.
                calculator.entry_line = ''
                yield line
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.

    Lines mix values and command names: "3 4 Add", "1 2 3 Pick(2)". Values
    before a command are entered before it runs.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.rpncalc_history'

    def dumper(self):
        '''
        Dump every token's type, text, and the type it parses as.
        '''
        lexer = Lexer()
        settings = self.calculator.settings
        print('<token type>\t<repr(text)>\t<value type>')
        status = 0
        for line in self.args.expressions:
            for token in lexer.lex(line):
                if self.command(token) is not None:
                    parsed = 'command'
                else:
                    parser = EntryLineParser(token.text, settings, lexer)
                    if parser.has_error:
                        parsed = parser.error_message
                        status = 1
                    else:
                        parsed = parser.values[0].value_type
                print(token.value_type or 'untyped',
                      repr(token.text),
                      parsed,
                      sep='\t')
        return status

    def executor(self):
        '''
        Run each line through the calculator, printing the stack after it.
        '''
        calculator = self.calculator
        status = 0
        for line in self.args.expressions:
            if not self.evaluate(line):
                # FIXME: repeats the bottom toolbar when prompting.
                print(calculator.error_message, file=stderr)
                status = 1
            self.print_stack()
        return status

    def raw_grammar(self):
        '''
        Print the internally defined tokenizer grammar.
        '''
        print(Lexer.LEXEME)
        return 0

    def command(self, token):
        '''
        Return (name, parameter) if token names a command, else None.
        '''
        if token.value_type is not None:
            return None
        match = COMMAND.fullmatch(token.text)
        if match is None:
            return None
        name = match.group('name')
        parameter = match.group('parameter')
        if parameter is not None:
            parameter = int(parameter)
        if not self.calculator.has_command(name, parameter):
            return None
        return name, parameter

    def evaluate(self, line):
        '''
        Enter values and run commands, left to right.

        Abandon the rest of the line at the first error, and return whether
        there was none.
        '''
        pending = 0
        for token in self.lexer.lex(line):
            command = self.command(token)
            if command is None:
                continue
            if not self.enter(line[pending:token.start]) or \
               not self.execute(*command):
                return False
            pending = token.start + len(token.text)
        return self.enter(line[pending:])

    def enter(self, text):
        '''
        Add text to the entry line and enter it.
        '''
        text = text.strip()
        if not text:
            return True
        calculator = self.calculator
        calculator.entry_line = ' '.join(part
                                         for part
                                         in (calculator.entry_line, text)
                                         if part)
        return self.execute('Enter')

    def execute(self, name, parameter=None):
        calculator = self.calculator
        calculator.execute_command(name, parameter)
        if calculator.error_message:
            calculator.entry_line = ''
            return False
        return True

    def print_stack(self):
        '''
        Print the stack bottom to top, numbered from the top.
        '''
        settings = self.calculator.settings
        levels = list(enumerate(self.calculator.stack, 1))
        for level, value in reversed(levels):
            print('{}: {}'.format(level, value.to_string(settings)))

    def _prompting_input(self):
        '''
        Return prompting input if either:
        - prompt explicitly specified.
        - both stdin/out are a tty

        Otherwise return stdin.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    calculator=self.calculator,
                                    history_file=self.HISTORY_FILE)
        else:
            return stdin

    def _settings(self):
        try:
            return DisplaySettings(**{name: value
                                      for name, value
                                      in vars(self.args).items()
                                      if name in DisplaySettings.NAMES and
                                      value is not None})
        except ArgumentError as e:
            self.argument_parser.error(str(e))

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        settings_group = self.argument_parser.add_argument_group(
            'display settings')
        for long_, dest, enum in [('--angle-mode', 'angle_mode', AngleMode),
                                  ('--binary-format', 'binary_format',
                                   BinaryFormat),
                                  ('--complex-format', 'complex_format',
                                   ComplexFormat),
                                  ('--decimal-format', 'decimal_format',
                                   DecimalFormat),
                                  ('--fraction-format', 'fraction_format',
                                   FractionFormat)]:
            type_, choices = _enum_option(enum)
            settings_group.add_argument(long_, dest=dest, type=type_,
                                        choices=choices,
                                        metavar='{{{}}}'.format(
                                            ','.join(member.name.lower()
                                                     for member in enum)))
        settings_group.add_argument('--word-size', dest='binary_word_size',
                                    type=int)
        settings_group.add_argument('--fixed-digits',
                                    dest='fixed_decimal_digits', type=int)
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)
        self.lexer = Lexer()

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Return the exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(stream=stderr,
                            level=logging.DEBUG if self.args.verbose
                            else logging.WARNING)
        self.calculator = Calculator(self._settings())
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            return self.args.action()
        except KeyboardInterrupt:
            return 1


def main():
    exit(CLI().run())
