'''
The five numeric value types, in promotion order.

Binary < Integer < Fraction < Double < Complex. Each type only operates on
its own type; operations.py promotes mixed operands first.
'''

from decimal import Decimal
import cmath
import math

from .rational import Rational
from .settings import BinaryFormat, ComplexFormat, DecimalFormat, \
    FractionFormat
from .util import ArgumentError, ArgumentOutOfRangeError, CalcOverflowError, \
    DivideByZeroError, InvalidCastError, NotFiniteNumberError, \
    check_gcd_loop_iterations, gcd_float, is_integer, num_digits, \
    round_half_away, strip_delimiters, truncated_remainder, \
    try_parse_digits, try_parse_double, try_parse_integer, \
    DEFAULT_PRECISION
from .value import DisplayFormat, NumericValue, ValueType, resolve


MASK64 = 2 ** 64 - 1
# Exponents past this go through rational exponentiation instead.
MAX_INTEGER_EXPONENT = 2 ** 31 - 1


def _to_float(integer):
    try:
        return float(integer)
    except OverflowError as e:
        raise CalcOverflowError('Value is too large for a double') from e


def _pow(x, y):
    '''
    math.pow, but overflowing to infinity instead of raising.
    '''
    try:
        return math.pow(x, y)
    except OverflowError:
        return math.inf


class BinaryValue(NumericValue):
    '''
    Unsigned 64-bit word, displayed and masked per the current word size.
    '''

    __slots__ = ('_value',)
    value_type = ValueType.BINARY

    PREFIX = '#'
    SUFFIXES = {
        BinaryFormat.BINARY: 'b',
        BinaryFormat.OCTAL: 'o',
        BinaryFormat.DECIMAL: 'd',
        BinaryFormat.HEXADECIMAL: 'h',
    }
    FORMAT_SPECS = {
        BinaryFormat.BINARY: 'b',
        BinaryFormat.OCTAL: 'o',
        BinaryFormat.DECIMAL: 'd',
        BinaryFormat.HEXADECIMAL: 'X',
    }
    DISPLAY_NAMES = {
        BinaryFormat.BINARY: 'Binary',
        BinaryFormat.OCTAL: 'Octal',
        BinaryFormat.DECIMAL: 'Decimal',
        BinaryFormat.HEXADECIMAL: 'Hexadecimal',
    }

    def __init__(self, value):
        self._value = int(value) & MASK64

    @property
    def value(self):
        return self._value

    def _key(self):
        return self._value

    @staticmethod
    def mask(value, settings):
        '''
        Keep only the low bits that fit in the word size.
        '''
        return value & ((1 << resolve(settings).binary_word_size) - 1)

    def masked(self, settings):
        return self.mask(self._value, settings)

    @classmethod
    def parse(cls, text, settings=None):
        '''
        Parse "#FFh", "# 1010b", "#255" (default radix), "0xFF", or "255".

        Return None if text isn't a 64-bit word.
        '''
        if not text or not text.strip():
            return None
        text = text.strip()
        if text[0] == cls.PREFIX:
            value = cls._parse_suffixed(text[1:].lstrip(), settings)
        elif len(text) > 2 and text[:2].lower() == '0x':
            value = try_parse_digits(text[2:], 16)
        else:
            value = try_parse_digits(text.lstrip('+'), 10)
        if value is None or value > MASK64:
            return None
        return cls(value)

    @classmethod
    def _parse_suffixed(cls, text, settings):
        radix = BinaryFormat.DECIMAL if settings is None \
            else settings.binary_format
        # Suffixes are case-sensitive so hex digits like D stay digits.
        for binary_format, suffix in cls.SUFFIXES.items():
            if text.endswith(suffix):
                radix = binary_format
                text = text[:-1]
                break
        return try_parse_digits(text, radix.value)

    @classmethod
    def _format(cls, value, binary_format):
        return '{} {}{}'.format(cls.PREFIX,
                                format(value, cls.FORMAT_SPECS[binary_format]),
                                cls.SUFFIXES[binary_format])

    def to_string(self, settings=None):
        if settings is None:
            return self._format(self._value, BinaryFormat.DECIMAL)
        return self._format(self.masked(settings), settings.binary_format)

    def entry_text(self, settings=None):
        settings = resolve(settings)
        # Unmasked, so words from a wider word size survive a round trip.
        return self._format(self._value, settings.binary_format)

    def display_formats(self, settings=None):
        masked = self.masked(settings)
        return [DisplayFormat(self.DISPLAY_NAMES[binary_format],
                              self._format(masked, binary_format))
                for binary_format in self.SUFFIXES]

    def to_double(self):
        return float(self._value)

    def to_integer(self):
        # Always unsigned, unlike sign() and negate().
        return self._value

    def sign(self, settings=None):
        '''
        Return -1 if the word's most significant bit is set.
        '''
        if self._value == 0:
            return 0
        msb = 1 << (resolve(settings).binary_word_size - 1)
        return -1 if self._value & msb else 1

    def bitwise_and(self, other):
        return BinaryValue(self._value & other._value)

    def bitwise_or(self, other):
        return BinaryValue(self._value | other._value)

    def bitwise_xor(self, other):
        return BinaryValue(self._value ^ other._value)

    def bitwise_not(self, settings=None):
        return BinaryValue(self.mask(~self._value & MASK64, settings))

    def shift_left(self, bits, settings=None):
        if bits < 0:
            raise ArgumentOutOfRangeError('Bit count must be non-negative')
        return BinaryValue(self.mask((self._value << bits) & MASK64,
                                     settings))

    def shift_right(self, bits, settings=None):
        if bits < 0:
            raise ArgumentOutOfRangeError('Bit count must be non-negative')
        return BinaryValue(self.mask(self._value >> bits, settings))

    def rotate_left(self, bits, settings=None):
        '''
        Rotate within the word size; counts wrap around the word.
        '''
        word_size = resolve(settings).binary_word_size
        bits %= word_size
        value = self.masked(settings)
        return BinaryValue(self.mask((value << bits) |
                                     (value >> (word_size - bits)),
                                     settings))

    def rotate_right(self, bits, settings=None):
        word_size = resolve(settings).binary_word_size
        return self.rotate_left(word_size - bits % word_size, settings)

    def add(self, other, settings=None):
        return BinaryValue(self.mask(self._value + other._value, settings))

    def subtract(self, other, settings=None):
        return self.add(other.negate(settings), settings)

    def multiply(self, other, settings=None):
        return BinaryValue(self.mask(self._value * other._value, settings))

    def divide(self, other, settings=None):
        if other._value == 0:
            raise DivideByZeroError()
        return BinaryValue(self.mask(self._value // other._value, settings))

    def modulus(self, other, settings=None):
        if other._value == 0:
            raise DivideByZeroError()
        return BinaryValue(self.mask(self._value % other._value, settings))

    def negate(self, settings=None):
        '''
        Two's complement within the word size.
        '''
        return BinaryValue(self.mask(self.bitwise_not(settings)._value + 1,
                                     settings))

    def power(self, exponent):
        result = IntegerValue(self._value).power(IntegerValue(exponent._value))
        if isinstance(result, IntegerValue) and 0 <= result.value <= MASK64:
            return BinaryValue(result.value)
        return result

    def invert(self):
        return FractionValue(1, self._value)

    def gcd(self, other):
        return BinaryValue(math.gcd(self._value, other._value))


class IntegerValue(NumericValue):
    '''
    Arbitrary-precision integer.
    '''

    __slots__ = ('_value',)
    value_type = ValueType.INTEGER

    def __init__(self, value):
        self._value = int(value)

    @property
    def value(self):
        return self._value

    def _key(self):
        return self._value

    @classmethod
    def parse(cls, text, settings=None):
        value = try_parse_integer(text)
        return None if value is None else cls(value)

    def to_string(self, settings=None):
        return str(self._value)

    def display_formats(self, settings=None):
        value = self._value
        hexadecimal = ('-0x' if value < 0 else '0x') + format(abs(value), 'X')
        return [
            DisplayFormat(None, self.to_string(settings)),
            DisplayFormat('Formatted', '{:,}'.format(value)),
            DisplayFormat('Hexadecimal', hexadecimal),
        ]

    def to_double(self):
        return _to_float(self._value)

    def to_integer(self):
        return self._value

    def sign(self):
        return (self._value > 0) - (self._value < 0)

    def add(self, other, settings=None):
        return IntegerValue(self._value + other._value)

    def subtract(self, other, settings=None):
        return IntegerValue(self._value - other._value)

    def multiply(self, other, settings=None):
        return IntegerValue(self._value * other._value)

    def divide(self, other, settings=None):
        '''
        Exact division: a Fraction, or an Integer when it divides evenly.
        '''
        result = Rational(self._value, other._value)
        if result.denominator == 1:
            return IntegerValue(result.numerator)
        return FractionValue(result)

    def modulus(self, other, settings=None):
        return IntegerValue(truncated_remainder(self._value, other._value))

    def negate(self, settings=None):
        return IntegerValue(-self._value)

    def power(self, exponent):
        if exponent._value < 0 or exponent._value > MAX_INTEGER_EXPONENT:
            return FractionValue(self._value).power(
                FractionValue(exponent._value))
        return IntegerValue(self._value ** exponent._value)

    def invert(self):
        return FractionValue(1, self._value)

    def gcd(self, other):
        return IntegerValue(math.gcd(self._value, other._value))

    def factorial(self):
        if self._value < 0:
            raise ArgumentOutOfRangeError(
                'Factorial requires a non-negative integer')
        return IntegerValue(math.factorial(self._value))


class FractionValue(NumericValue):
    '''
    Exact fraction, backed by a Rational.
    '''

    __slots__ = ('_value',)
    value_type = ValueType.FRACTION

    ENTRY_SEPARATOR = '_'
    DISPLAY_SEPARATOR = '/'

    def __init__(self, value, denominator=None):
        if denominator is not None:
            value = Rational(value, denominator)
        elif not isinstance(value, Rational):
            value = Rational(value)
        self._value = value

    @property
    def rational(self):
        return self._value

    @property
    def numerator(self):
        return self._value.numerator

    @property
    def denominator(self):
        return self._value.denominator

    def _key(self):
        return self._value

    @classmethod
    def parse(cls, text, settings=None):
        '''
        Parse "3/4", "3_4", "1_1_2" (mixed) or "1 1/2".
        '''
        if not text or not text.strip():
            return None
        parts = [part
                 for part
                 in text.replace(cls.ENTRY_SEPARATOR, ' ')
                        .replace(cls.DISPLAY_SEPARATOR, ' ')
                        .split(' ')
                 if part]
        numbers = [try_parse_integer(part) for part in parts]
        if None in numbers:
            return None
        if len(numbers) == 2:
            numerator, denominator = numbers
            if denominator == 0:
                return None
            return cls(numerator, denominator)
        elif len(numbers) == 3:
            whole, numerator, denominator = numbers
            if numerator < 0 or denominator <= 0:
                return None
            if whole < 0:
                numerator = -numerator
            return cls(Rational.from_mixed(whole, numerator, denominator))
        return None

    @staticmethod
    def _common(value, separator):
        return '{}{}{}'.format(value.numerator, separator, value.denominator)

    @classmethod
    def _mixed(cls, value, separator):
        whole = value.whole_part
        fraction = value.fractional_part
        if whole == 0:
            return cls._common(fraction, separator)
        if separator == cls.DISPLAY_SEPARATOR:
            separator_text = ' '
        else:
            separator_text = separator
        return '{}{}{}'.format(whole, separator_text,
                               cls._common(abs(fraction), separator))

    def _decimal(self, settings):
        value = float(self._value)
        if math.isinf(value):
            return self._common(self._value, self.DISPLAY_SEPARATOR)
        return DoubleValue.format(value, settings)

    def to_string(self, settings=None):
        if settings is None:
            return self._mixed(self._value, self.DISPLAY_SEPARATOR)
        if settings.fraction_format is FractionFormat.MIXED:
            return self._mixed(self._value, self.DISPLAY_SEPARATOR)
        elif settings.fraction_format is FractionFormat.DECIMAL:
            return self._decimal(settings)
        return self._common(self._value, self.DISPLAY_SEPARATOR)

    def entry_text(self, settings=None):
        if resolve(settings).fraction_format is FractionFormat.MIXED:
            return self._mixed(self._value, self.ENTRY_SEPARATOR)
        return self._common(self._value, self.ENTRY_SEPARATOR)

    def display_formats(self, settings=None):
        settings = resolve(settings)
        return [
            DisplayFormat('Mixed',
                          self._mixed(self._value, self.DISPLAY_SEPARATOR)),
            DisplayFormat('Common',
                          self._common(self._value, self.DISPLAY_SEPARATOR)),
            DisplayFormat('Decimal', self._decimal(settings)),
        ]

    def to_double(self):
        value = float(self._value)
        if math.isinf(value):
            raise CalcOverflowError('Fraction is too large for a double')
        return value

    def to_integer(self):
        return int(self._value)

    def sign(self):
        return self._value.sign

    def add(self, other, settings=None):
        return FractionValue(self._value + other._value)

    def subtract(self, other, settings=None):
        return FractionValue(self._value - other._value)

    def multiply(self, other, settings=None):
        return FractionValue(self._value * other._value)

    def divide(self, other, settings=None):
        return FractionValue(self._value / other._value)

    def modulus(self, other, settings=None):
        return FractionValue(self._value % other._value)

    def negate(self, settings=None):
        return FractionValue(-self._value)

    def invert(self):
        return FractionValue(self._value.invert())

    def power(self, exponent):
        base = self._value
        power = exponent._value
        if power.denominator == 1:
            return FractionValue(base ** power.numerator)
        elif base.sign < 0 and power.sign > 0 and power.denominator % 2:
            # Real principal root; complex power would pick another root.
            radicand = base ** power.numerator
            root = radicand.sign * _pow(abs(float(radicand)),
                                        1 / _to_float(power.denominator))
            return DoubleValue(root)
        elif base.sign > 0 and power.sign > 0:
            power = exponent.to_double()
            numerator = _pow(_to_float(base.numerator), power)
            denominator = _pow(_to_float(base.denominator), power)
            if is_integer(numerator) and is_integer(denominator):
                return FractionValue(int(numerator), int(denominator))
            return DoubleValue(numerator / denominator)
        return DoubleValue(self.to_double()).power(
            DoubleValue(exponent.to_double()))

    @property
    def whole_part(self):
        return IntegerValue(self._value.whole_part)

    @property
    def fractional_part(self):
        return FractionValue(self._value.fractional_part)

    def ceiling(self):
        quotient = self._value.whole_part
        if self._value.fractional_part > 0:
            quotient += 1
        return IntegerValue(quotient)

    def floor(self):
        quotient = self._value.whole_part
        if self._value.fractional_part < 0:
            quotient -= 1
        return IntegerValue(quotient)

    def gcd(self, other):
        x, y = self._value, other._value
        if not x and not y:
            return FractionValue(1)
        iteration = 0
        while y:
            x, y = y, x % y
            check_gcd_loop_iterations(iteration)
            iteration += 1
        return FractionValue(x)


class DoubleValue(NumericValue):
    '''
    Double precision floating point number.
    '''

    __slots__ = ('_value',)
    value_type = ValueType.DOUBLE

    def __init__(self, value):
        self._value = float(value)

    @property
    def value(self):
        return self._value

    def _key(self):
        return self._value

    @classmethod
    def parse(cls, text, settings=None):
        value = try_parse_double(text)
        return None if value is None else cls(value)

    @staticmethod
    def standard(value):
        return format(value, '.12g')

    @staticmethod
    def fixed(value, settings):
        return '{:.{}f}'.format(value, resolve(settings).fixed_decimal_digits)

    @staticmethod
    def scientific(value, settings):
        return '{:.{}e}'.format(value, resolve(settings).fixed_decimal_digits)

    @classmethod
    def format(cls, value, settings=None):
        '''
        Format a double per the decimal format setting.
        '''
        settings = resolve(settings)
        if settings.decimal_format is DecimalFormat.FIXED:
            return cls.fixed(value, settings)
        elif settings.decimal_format is DecimalFormat.SCIENTIFIC:
            return cls.scientific(value, settings)
        return cls.standard(value)

    def to_string(self, settings=None):
        if settings is None:
            return repr(self._value)
        return self.format(self._value, settings)

    def entry_text(self, settings=None):
        # Shortest text that round-trips.
        return repr(self._value)

    def display_formats(self, settings=None):
        return [
            DisplayFormat(None, self.standard(self._value)),
            DisplayFormat('Formatted', '{:,.2f}'.format(self._value)),
            DisplayFormat('Fixed', self.fixed(self._value, settings)),
            DisplayFormat('Scientific', self.scientific(self._value,
                                                        settings)),
        ]

    def to_double(self):
        return self._value

    def to_integer(self):
        if not math.isfinite(self._value):
            raise CalcOverflowError('{} is not an integer'.format(self._value))
        return int(self._value)

    def sign(self):
        return (self._value > 0) - (self._value < 0)

    def add(self, other, settings=None):
        return DoubleValue(self._value + other._value)

    def subtract(self, other, settings=None):
        return DoubleValue(self._value - other._value)

    def multiply(self, other, settings=None):
        return DoubleValue(self._value * other._value)

    def divide(self, other, settings=None):
        if other._value == 0:
            raise DivideByZeroError()
        return DoubleValue(self._value / other._value)

    def modulus(self, other, settings=None):
        if other._value == 0:
            raise DivideByZeroError()
        return DoubleValue(math.fmod(self._value, other._value))

    def negate(self, settings=None):
        return DoubleValue(-self._value)

    def invert(self):
        if self._value == 0:
            raise DivideByZeroError()
        return DoubleValue(1.0 / self._value)

    def power(self, exponent):
        x, y = self._value, exponent._value
        try:
            return DoubleValue(math.pow(x, y))
        except OverflowError:
            # Commit rejects it.
            return DoubleValue(math.inf)
        except ValueError:
            if x < 0:
                return ComplexValue(x).power(ComplexValue(y))
            # Zero to a negative power.
            return DoubleValue(math.inf)

    def gcd(self, other):
        return DoubleValue(gcd_float(self._value, other._value))


class ComplexValue(NumericValue):
    '''
    Complex number, as a pair of doubles.
    '''

    __slots__ = ('_value',)
    value_type = ValueType.COMPLEX

    START_DELIMITER = '('
    END_DELIMITER = ')'
    SEPARATOR = ','
    PHASE_PREFIX = '@'

    def __init__(self, real, imaginary=None):
        if imaginary is None:
            self._value = complex(real)
        else:
            self._value = complex(float(real), float(imaginary))

    @property
    def value(self):
        return self._value

    @property
    def real(self):
        return self._value.real

    @property
    def imaginary(self):
        return self._value.imag

    def _key(self):
        return self._value

    def compare(self, other):
        raise ArgumentError('Unable to compare {} and {}'.format(self, other))

    @classmethod
    def parse(cls, text, settings=None):
        '''
        Parse "(re, im)" or "(magnitude, @angle)".

        Either delimiter may be missing.
        '''
        if not text or not text.strip():
            return None
        text = strip_delimiters(text.strip(), cls.START_DELIMITER,
                                cls.END_DELIMITER)
        parts = [part
                 for part
                 in text.replace(cls.SEPARATOR, ' ').split(' ')
                 if part]
        if len(parts) != 2:
            return None
        first, second = parts
        polar = second[0] == cls.PHASE_PREFIX
        if polar:
            second = second[1:]
        first, second = try_parse_double(first), try_parse_double(second)
        if first is None or second is None:
            return None
        if polar:
            if settings is not None:
                second = settings.to_radians(second)
            return cls(cmath.rect(first, second))
        return cls(first, second)

    def _rectangular(self, settings):
        return '{}{}{} {}{}'.format(self.START_DELIMITER,
                                    DoubleValue.format(self.real, settings),
                                    self.SEPARATOR,
                                    DoubleValue.format(self.imaginary,
                                                       settings),
                                    self.END_DELIMITER)

    def _polar(self, settings):
        settings = resolve(settings)
        magnitude, phase = cmath.polar(self._value)
        return '{}{}{} {}{}{}'.format(self.START_DELIMITER,
                                      DoubleValue.format(magnitude, settings),
                                      self.SEPARATOR,
                                      self.PHASE_PREFIX,
                                      DoubleValue.format(
                                          settings.from_radians(phase),
                                          settings),
                                      self.END_DELIMITER)

    def _algebraic(self, settings):
        real, imaginary = self.real, self.imaginary
        if real == 0 and imaginary != 0:
            return DoubleValue.format(imaginary, settings) + 'i'
        text = DoubleValue.format(real, settings)
        if imaginary != 0:
            text += ' - ' if imaginary < 0 else ' + '
            text += DoubleValue.format(abs(imaginary), settings) + 'i'
        return text

    def to_string(self, settings=None):
        if settings is not None and \
           settings.complex_format is ComplexFormat.POLAR:
            return self._polar(settings)
        return self._rectangular(settings)

    def entry_text(self, settings=None):
        # Always rectangular, with round-trip doubles.
        return '{}{!r}{} {!r}{}'.format(self.START_DELIMITER, self.real,
                                        self.SEPARATOR, self.imaginary,
                                        self.END_DELIMITER)

    def display_formats(self, settings=None):
        return [
            DisplayFormat('Algebraic', self._algebraic(settings)),
            DisplayFormat('Rectangular', self._rectangular(settings)),
            DisplayFormat('Polar', self._polar(settings)),
        ]

    def _require_scalar(self):
        if self.imaginary != 0:
            raise InvalidCastError(
                'A complex number with an imaginary part is not a scalar')

    def to_double(self):
        self._require_scalar()
        return self.real

    def to_integer(self):
        self._require_scalar()
        return DoubleValue(self.real).to_integer()

    def to_complex(self):
        return self._value

    def add(self, other, settings=None):
        return ComplexValue(self._value + other._value)

    def subtract(self, other, settings=None):
        return ComplexValue(self._value - other._value)

    def multiply(self, other, settings=None):
        return ComplexValue(self._value * other._value)

    def divide(self, other, settings=None):
        if other._value == 0:
            raise DivideByZeroError()
        return ComplexValue(self._value / other._value)

    def negate(self, settings=None):
        return ComplexValue(-self._value)

    def invert(self):
        if self._value == 0:
            raise DivideByZeroError()
        return ComplexValue(1 / self._value)

    def power(self, exponent):
        try:
            return ComplexValue(self._value ** exponent._value)
        except ZeroDivisionError as e:
            raise DivideByZeroError() from e
        except OverflowError as e:
            raise NotFiniteNumberError() from e

    def magnitude(self):
        return abs(self._value)

    def phase(self):
        return cmath.phase(self._value)


def _double_to_fraction_by_scaling(value):
    '''
    Approximate a double by solving 99x = 100x - x.

    Finds short repeating fractions like 1/11 = 0.0909...
    '''
    scale = 100
    nine_x = round_half_away(scale * value - value, DEFAULT_PRECISION)
    divisor = gcd_float(nine_x, scale - 1)
    numerator = round_half_away(nine_x / divisor, DEFAULT_PRECISION)
    denominator = round_half_away((scale - 1) / divisor, DEFAULT_PRECISION)
    if not math.isfinite(numerator) or not math.isfinite(denominator):
        raise CalcOverflowError('Unable to convert {} to a fraction'.format(
            value))
    return FractionValue(int(numerator), int(denominator))


def double_to_fraction(value):
    '''
    Convert a double to the most likely intended fraction.

    Tries both repeating-fraction detection and the double's decimal value,
    then picks the closer one, unless their denominators differ by more than
    two digits, in which case the shorter denominator wins.
    '''
    scaled = _double_to_fraction_by_scaling(value)
    # 15 significant digits, like a decimal converted from a double.
    decimal = FractionValue(Rational.from_decimal(Decimal(format(value,
                                                                 '.15g'))))
    scaled_error = abs(float(scaled.rational) - value)
    decimal_error = abs(float(decimal.rational) - value)
    scaled_digits = num_digits(scaled.denominator)
    decimal_digits = num_digits(decimal.denominator)
    if abs(scaled_digits - decimal_digits) <= 2:
        return scaled if scaled_error < decimal_error else decimal
    return scaled if scaled_digits < decimal_digits else decimal
