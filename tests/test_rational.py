'''
Rational number tests
'''

from decimal import Decimal
from math import gcd, inf

from pytest import raises

from rpncalc.rational import Rational
from rpncalc.util import ArgumentError, CalcOverflowError, DivideByZeroError


def test_lowest_terms():
    for numerator, denominator in [(6, -4), (0, -5), (-9, -12), (7, 1),
                                   (10 ** 30, 10 ** 29), (-1, 3)]:
        r = Rational(numerator, denominator)
        assert gcd(r.numerator, r.denominator) == 1
        assert r.denominator > 0
    assert Rational(6, -4) == Rational(-3, 2)
    assert (Rational(0, -5).numerator, Rational(0, -5).denominator) == (0, 1)


def test_zero_denominator():
    with raises(DivideByZeroError):
        Rational(1, 0)


def test_mixed():
    assert Rational.from_mixed(1, 1, 2) == Rational(3, 2)
    assert Rational.from_mixed(-1, -1, 2) == Rational(-3, 2)


def test_parts_truncate():
    assert Rational(-3, 2).whole_part == -1
    assert Rational(-3, 2).fractional_part == Rational(-1, 2)
    assert Rational(7, 3).whole_part == 2
    assert Rational(7, 3).fractional_part == Rational(1, 3)


def test_arithmetic():
    assert Rational(1, 3) + Rational(1, 6) == Rational(1, 2)
    assert Rational(1, 3) - 1 == Rational(-2, 3)
    assert 1 - Rational(1, 3) == Rational(2, 3)
    assert Rational(2, 3) * Rational(3, 4) == Rational(1, 2)
    assert Rational(2, 3) / Rational(4, 3) == Rational(1, 2)
    assert -Rational(1, 2) == Rational(-1, 2)


def test_truncated_modulus():
    assert Rational(7, 2) % 1 == Rational(1, 2)
    assert Rational(-7, 2) % 1 == Rational(-1, 2)
    with raises(DivideByZeroError):
        Rational(1) % Rational(0)


def test_power():
    assert Rational(2, 3) ** 2 == Rational(4, 9)
    assert Rational(2, 3) ** -2 == Rational(9, 4)
    assert Rational(5) ** 0 == Rational(1)
    with raises(ArgumentError):
        Rational(0) ** -1


def test_huge_power():
    assert Rational(-1) ** (2 ** 31 + 1) == Rational(-1)
    assert Rational(-1) ** (2 ** 31) == Rational(1)
    assert Rational(1) ** (2 ** 40) == Rational(1)
    with raises(CalcOverflowError):
        Rational(2) ** (2 ** 31)


def test_float():
    assert float(Rational(1, 4)) == 0.25
    assert float(Rational(10 ** 400, 3)) == inf
    assert float(Rational(-10 ** 400, 3)) == -inf


def test_from_decimal():
    assert Rational.from_decimal(Decimal('0.1')) == Rational(1, 10)
    assert Rational.from_decimal('-2.5') == Rational(-5, 2)
    with raises(ArgumentError):
        Rational.from_decimal(Decimal('NaN'))


def test_from_float_exact():
    assert Rational.from_float(0.5) == Rational(1, 2)
    assert Rational.from_float(0.1) != Rational(1, 10)


def test_compare():
    assert Rational(1, 3).compare(Rational(1, 2)) == -1
    assert Rational(2, 4).compare(Rational(1, 2)) == 0
    assert Rational(3, 2).compare(1) == 1
    assert Rational(1, 3) < Rational(1, 2)
    assert sorted([Rational(1, 2), Rational(-1), Rational(1, 3)]) == \
        [Rational(-1), Rational(1, 3), Rational(1, 2)]


def test_str():
    assert str(Rational(4, 2)) == '2'
    assert str(Rational(-3, 6)) == '-1/2'
