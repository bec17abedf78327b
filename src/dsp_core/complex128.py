"""
128-bit Complex Values

A complex number stored as two IEEE-754 double precision floats (a 64-bit
real part and a 64-bit imaginary part), with the arithmetic needed by the
Fourier transform routines in :mod:`dsp_core.dft`.

Values are immutable: every operation returns a new ``Complex128``.
Floating point special values (Infinity, NaN) propagate through all
operations, including division by zero, instead of raising.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Complex128:
    """
    A complex number ``re + im*i``.

    Parameters
    ----------
    re : float
        Real part
    im : float
        Imaginary part

    Examples
    --------
    >>> a = Complex128(1.0, 2.0)
    >>> b = Complex128.from_real(3.0)
    >>> a * b
    Complex128(re=3.0, im=6.0)
    """
    re: float
    im: float

    def __post_init__(self):
        object.__setattr__(self, 're', float(self.re))
        object.__setattr__(self, 'im', float(self.im))

    @classmethod
    def from_real(cls, re: float) -> 'Complex128':
        """The complex number with the given real part and a zero imaginary part."""
        return cls(re, 0.0)

    @classmethod
    def from_imag(cls, im: float) -> 'Complex128':
        """The complex number with the given imaginary part and a zero real part."""
        return cls(0.0, im)

    @classmethod
    def from_polar(cls, r: float, theta: float) -> 'Complex128':
        """
        The complex number at polar coordinates ``(r, theta)``.

        Sine and cosine come from one evaluation of ``exp(i*theta)``.
        """
        with np.errstate(invalid='ignore'):
            cis = np.exp(np.complex128(complex(0.0, theta)))
            return cls(r * cis.real, r * cis.imag)

    @classmethod
    def from_complex(cls, z: complex) -> 'Complex128':
        """Convert a Python or numpy complex scalar."""
        z = complex(z)
        return cls(z.real, z.imag)

    def real(self) -> float:
        """The real part."""
        return self.re

    def imag(self) -> float:
        """The imaginary part."""
        return self.im

    def conj(self) -> 'Complex128':
        """The complex conjugate ``re - im*i``."""
        return Complex128(self.re, -self.im)

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def __add__(self, rhs):
        if not isinstance(rhs, Complex128):
            return NotImplemented
        return Complex128(self.re + rhs.re, self.im + rhs.im)

    def __sub__(self, rhs):
        if not isinstance(rhs, Complex128):
            return NotImplemented
        return Complex128(self.re - rhs.re, self.im - rhs.im)

    def __mul__(self, rhs):
        if not isinstance(rhs, Complex128):
            return NotImplemented
        return Complex128(self.re * rhs.re - self.im * rhs.im,
                          self.re * rhs.im + self.im * rhs.re)

    def __truediv__(self, rhs):
        """
        Divide as ``(self * conj(rhs)) / (rhs * conj(rhs))``.

        The denominator is real, so both components of the numerator are
        divided by its real part. A zero divisor yields Infinity/NaN
        components rather than ``ZeroDivisionError``.
        """
        if not isinstance(rhs, Complex128):
            return NotImplemented
        num = self * rhs.conj()
        den = rhs * rhs.conj()
        if rhs.re == 0.0 and rhs.im == 0.0:
            # self * conj(0) is zero as well; divide self so nonzero parts go to +-Infinity
            num = self
        with np.errstate(divide='ignore', invalid='ignore'):
            re = np.float64(num.re) / den.re
            im = np.float64(num.im) / den.re
        return Complex128(re, im)
