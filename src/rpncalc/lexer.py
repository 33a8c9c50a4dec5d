from collections import namedtuple
from functools import reduce
import operator

import regex

from .value import ValueType


Token = namedtuple('Token', 'text start value_type')


class Lexer:
    '''
    Lexer for the entry line grammar.

    Splits a line into whitespace separated tokens, except that complex
    numbers and dates may contain whitespace, and binary numbers may have
    whitespace after their prefix. Tokens that can only be one type of value
    say so; the parser has to guess the rest.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    # Read to the closing parenthesis or the end of the line.
    COMPLEX = r'''
               \(
               [^)]*
               \)?
               '''
    # Read to the closing quote or the end of the line.
    DATETIME = r'''
                "
                [^"]*
                "?
                '''
    # Whitespace after # isn't part of the number.
    BINARY = r'''
              (?:
                  (?<binary_prefix>\#)
                  \s*
                  (?<binary_digits>\S*)
              )|(?:
                  0x
                  \S*
              )
              '''
    # Anything else, up to whitespace.
    UNTYPED = r'''
               (?!0x)
               [^\s("\#]
               \S*
               '''
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<complex>' + COMPLEX + r')|' \
             r'(?<datetime>' + DATETIME + r')|' \
             r'(?<binary>' + BINARY + r')|' \
             r'(?<untyped>' + UNTYPED + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    TYPES = {
        'complex': ValueType.COMPLEX,
        'datetime': ValueType.DATETIME,
        'binary': ValueType.BINARY,
        'untyped': None,
    }

    def lex(self, line):
        '''
        Take a line and yield a Token for each lexeme, skipping whitespace.
        '''
        pattern = regex.compile(type(self).LEXEME, flags=type(self).FLAGS)
        position = 0
        while position < len(line):
            match = pattern.match(line, position)
            # Every character starts some lexeme.
            assert match is not None and match.end() > position
            position = match.end()
            if match.group('space') is not None:
                continue
            yield self.token(match)

    def token(self, match):
        '''
        Make a Token out of a lexeme match.
        '''
        if match.group('binary_prefix') is not None:
            kind = 'binary'
            text = match.group('binary_prefix') + match.group('binary_digits')
        else:
            kind = self.kind(match)
            text = match.group(kind)
        return Token(text, match.start(), type(self).TYPES[kind])

    def kind(self, match):
        '''
        Return the name of the lexeme group that matched.
        '''
        for kind in type(self).TYPES:
            if match.group(kind) is not None:
                return kind
        raise ValueError('Not a token: {!r}'.format(match.group(0)))
