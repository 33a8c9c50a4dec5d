'''
Entry line lexer tests
'''

from rpncalc.lexer import Lexer, Token
from rpncalc.value import ValueType


def test_whitespace_separates():
    l = Lexer()
    assert list(l.lex('  12\t ab ')) == [Token('12', 2, None),
                                         Token('ab', 6, None)]


def test_empty():
    l = Lexer()
    assert list(l.lex('')) == []
    assert list(l.lex('   ')) == []


def test_complex_keeps_whitespace():
    l = Lexer()
    assert list(l.lex('(1, 2) 3')) == [Token('(1, 2)', 0, ValueType.COMPLEX),
                                       Token('3', 7, None)]


def test_unterminated_complex():
    l = Lexer()
    assert list(l.lex('1 (1, 2')) == [Token('1', 0, None),
                                      Token('(1, 2', 2, ValueType.COMPLEX)]


def test_datetime_keeps_whitespace():
    l = Lexer()
    tokens = list(l.lex('"1/2/2020 3:00 PM" x'))
    assert tokens == [Token('"1/2/2020 3:00 PM"', 0, ValueType.DATETIME),
                      Token('x', 19, None)]


def test_binary_prefix_whitespace_dropped():
    l = Lexer()
    assert list(l.lex('# FFh 1')) == [Token('#FFh', 0, ValueType.BINARY),
                                       Token('1', 6, None)]


def test_hex_prefix():
    l = Lexer()
    assert list(l.lex('0xFF')) == [Token('0xFF', 0, ValueType.BINARY)]


def test_delimiters_only_count_first():
    l = Lexer()
    assert list(l.lex('a(b c"d')) == [Token('a(b', 0, None),
                                      Token('c"d', 4, None)]
