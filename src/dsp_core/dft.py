"""
Discrete Fourier Transform using the recursive Cooley-Tukey FFT

Forward and inverse transforms over sequences of :class:`Complex128`,
written into a caller-supplied output buffer.

Restrictions and liberties shared by :func:`fdft` and :func:`idft`:

- The input sequence must have a length n >= 1.
- The output sequence must have at least n elements.
- The first n elements of the output are overwritten; nothing past them is
  touched.
- The previous contents of the output are never read, so a buffer of
  ``None`` placeholders is fine.
- The output must be a different object from the input.
- n is assumed to be a power of two. This is NOT checked. For other lengths
  the butterfly never writes some of the first n slots (for odd n the last
  one), so they keep their previous contents and the result is wrong. When
  such an unwritten slot holds a placeholder like ``None`` and a later
  butterfly or the inverse scaling reads it, the call raises ``TypeError``
  or ``AttributeError`` instead.
"""

import math
from typing import Callable, MutableSequence, Sequence

from .complex128 import Complex128
from .utils.logging import get_logger

logger = get_logger(__name__)


def _identity(c: Complex128) -> Complex128:
    return c


def _check_buffers(input: Sequence[Complex128], output: MutableSequence) -> None:
    if len(input) == 0:
        raise ValueError("The input sequence is empty")
    if len(output) < len(input):
        raise ValueError(
            f"The output sequence is too small: {len(output)} < {len(input)}"
        )
    if output is input:
        raise ValueError("The output sequence must not be the input sequence")


def fdft(input: Sequence[Complex128], output: MutableSequence) -> None:
    """
    Compute the forward discrete Fourier transform of the input.

    X[k] = sum_j x[j] * exp(-2*pi*i*j*k/n)

    Parameters
    ----------
    input : sequence of Complex128
        Time-domain signal of length n
    output : mutable sequence
        Buffer receiving the n frequency-domain coefficients

    Raises
    ------
    ValueError
        If the input is empty, the output is shorter than the input, or the
        output is the input.

    Examples
    --------
    >>> x = [Complex128.from_real(v) for v in (1, 1, 0, 0)]
    >>> X = [None] * 4
    >>> fdft(x, X)
    >>> X[0]
    Complex128(re=2.0, im=0.0)
    """
    _check_buffers(input, output)
    n = len(input)
    logger.debug("fdft: n=%d", n)
    _fft(input, output, n, 1, _identity)


def idft(input: Sequence[Complex128], output: MutableSequence) -> None:
    """
    Compute the inverse discrete Fourier transform of the input.

    x[j] = (1/n) * sum_k X[k] * exp(+2*pi*i*j*k/n)

    Same restrictions as :func:`fdft`. Reuses the forward butterfly through
    IDFT(X) = conj(DFT(conj(X))) / n.
    """
    _check_buffers(input, output)
    n = len(input)
    logger.debug("idft: n=%d", n)
    _fft(input, output, n, 1, Complex128.conj)

    scale = Complex128.from_real(n)
    for k in range(n):
        output[k] = output[k].conj() / scale


def _fft(
    src: Sequence[Complex128],
    dst: MutableSequence,
    n: int,
    stride: int,
    leaf: Callable[[Complex128], Complex128],
    src_off: int = 0,
    dst_off: int = 0,
) -> None:
    """
    Radix-2 decimation-in-time butterfly.

    Transforms the n elements ``src[src_off + j*stride]`` into
    ``dst[dst_off : dst_off + n]``, applying ``leaf`` to every input element.
    The two recursive calls write disjoint halves of that range and only read
    ``src``.
    """
    if n == 1:
        dst[dst_off] = leaf(src[src_off])
        return

    half = n // 2
    _fft(src, dst, half, 2 * stride, leaf, src_off, dst_off)
    _fft(src, dst, half, 2 * stride, leaf, src_off + stride, dst_off + half)

    for k in range(half):
        t = Complex128.from_polar(1.0, -2.0 * math.pi * k / n) * dst[dst_off + k + half]
        e = dst[dst_off + k]
        dst[dst_off + k] = e + t
        dst[dst_off + k + half] = e - t
