'''
RPN scientific calculator core.

Values of seven types (Binary, Integer, Fraction, Double, Complex, DateTime
and TimeSpan) live on an operand stack. Named commands pop their operands
and push their results in a single transaction, so a failed command leaves
the stack alone and the last command's arguments can be recalled.

Text goes in through the entry line, which is parsed as it's typed so a
front end can tell whether the user is partway through a complex number,
a date, or a number whose sign could be toggled.
'''

from .calculator import Calculator, CommandResult
from .cli import CLI
from .lexer import Lexer
from .parser import EntryLineParser
from .settings import DisplaySettings


__all__ = 'Calculator', 'CommandResult', 'CLI', 'DisplaySettings', \
    'EntryLineParser', 'Lexer'
