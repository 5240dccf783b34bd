"""Complex numbers with double-precision components. Every operation returns a new Complex; instances are never mutated
after construction.

Division by the zero complex number follows IEEE float semantics (NaN/Infinity) rather than raising, which Python's
own float division does not do, so division goes through _ieee_div.
"""

import math
from dataclasses import dataclass
from decimal import Decimal


def _ieee_div(num, den):
    """num / den with IEEE-754 results for a zero denominator: 0/0 (or NaN/0) is NaN, x/0 is a signed infinity."""
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def format_real(x):
    """Number-to-string as the calculator prints it: integral values without a fractional part, -0 as 0."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if x == 0:
        return "0"
    if x.is_integer() and abs(x) < 1e21:
        # shortest round-trip digits, zero padded: 2.0 ** 60 prints as 1152921504606847000
        return format(Decimal(repr(x)), "f").split(".")[0]
    return repr(x)


@dataclass(frozen=True)
class Complex:
    """A complex number. Note that abs, arg and norm return a Complex with a zero imaginary part rather than a float,
    so that every unary function has the same result type.
    """
    real: float
    imag: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "real", float(self.real))
        object.__setattr__(self, "imag", float(self.imag))

    @staticmethod
    def add(a, b):
        return Complex(a.real + b.real, a.imag + b.imag)

    @staticmethod
    def sub(a, b):
        return Complex(a.real - b.real, a.imag - b.imag)

    @staticmethod
    def mul(a, b):
        return Complex(a.real * b.real - a.imag * b.imag, a.real * b.imag + a.imag * b.real)

    @staticmethod
    def div(a, b):
        """a * conj(b) / |b|^2. A zero b propagates NaN/Infinity instead of raising."""
        r = Complex.mul(a, b.conj())
        norm = b.real * b.real + b.imag * b.imag
        return Complex(_ieee_div(r.real, norm), _ieee_div(r.imag, norm))

    def conj(self):
        return Complex(self.real, -self.imag)

    def norm(self):
        """Squared magnitude."""
        return Complex(self.real * self.real + self.imag * self.imag, 0)

    def abs(self):
        """Magnitude. math.hypot avoids the overflow of sqrt(a*a + b*b)."""
        return Complex(math.hypot(self.real, self.imag), 0)

    def arg(self):
        """Principal angle in radians, in (-pi, pi]."""
        return Complex(math.atan2(self.imag, self.real), 0)

    def neg(self):
        return Complex(-self.real, -self.imag)

    def __add__(self, other):
        return Complex.add(self, other)

    def __sub__(self, other):
        return Complex.sub(self, other)

    def __mul__(self, other):
        return Complex.mul(self, other)

    def __truediv__(self, other):
        return Complex.div(self, other)

    def __neg__(self):
        return self.neg()

    def __pos__(self):
        return self

    def __complex__(self):
        return complex(self.real, self.imag)

    def __str__(self):
        """Canonical form. A negative imaginary part is not special-cased: (1, -2) is '1 + -2i'."""
        if self.real == 0 and self.imag == 0:
            return "0"
        elif self.real == 0:
            return format_real(self.imag) + "i"
        elif self.imag == 0:
            return format_real(self.real)
        return f"{format_real(self.real)} + {format_real(self.imag)}i"


ZERO = Complex(0, 0)
I = Complex(0, 1)
