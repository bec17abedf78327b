"""
Fast FFT Implementation using Numba JIT

ndarray counterpart of :mod:`dsp_core.dft`. Same radix-2 decimation-in-time
algorithm, but in iterative form:
1. Bit-reversal permutation of the input into the output buffer
2. Butterfly stages of size 2, 4, ..., N over the output, in place
3. Numba JIT compilation (nopython mode, cached)

The inverse reuses the forward core via IFFT(X) = conj(FFT(conj(X))) / N.

Unlike the recursive engine, the jitted loops run without bounds checks, so
lengths that are not a power of two are rejected up front.
"""

import math

import numpy as np
from numba import jit

from .utils.logging import get_logger

logger = get_logger(__name__)


@jit(nopython=True, cache=True)
def _bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _fft_radix2_iter(x: np.ndarray, out: np.ndarray, conj_leaf: bool) -> None:
    """
    Iterative Cooley-Tukey radix-2 DIT FFT of x into out[:N].

    When conj_leaf is set every input element is conjugated on its way in.
    """
    N = len(x)
    n_bits = int(math.log2(N))

    # Bit-reversal permutation
    for i in range(N):
        j = _bit_reverse(i, n_bits)
        if conj_leaf:
            out[j] = np.conj(x[i])
        else:
            out[j] = x[i]

    stage_size = 2
    while stage_size <= N:
        half_size = stage_size // 2

        for k in range(0, N, stage_size):
            for j in range(half_size):
                angle = -2.0 * math.pi * j / stage_size
                w = math.cos(angle) + 1j * math.sin(angle)

                even_idx = k + j
                odd_idx = k + j + half_size

                even = out[even_idx]
                odd = out[odd_idx] * w

                out[even_idx] = even + odd
                out[odd_idx] = even - odd

        stage_size *= 2


@jit(nopython=True, cache=True)
def _ifft_core(X: np.ndarray, out: np.ndarray) -> None:
    """Core IFFT using conjugate trick."""
    N = len(X)
    _fft_radix2_iter(X, out, True)
    for k in range(N):
        out[k] = np.conj(out[k]) / N


def _check_arrays(x: np.ndarray, out: np.ndarray) -> None:
    if not isinstance(x, np.ndarray) or x.ndim != 1:
        raise ValueError("The input must be a 1-D ndarray")
    if not isinstance(out, np.ndarray) or out.ndim != 1:
        raise ValueError("The output must be a 1-D ndarray")
    if out.dtype != np.complex128:
        raise ValueError(f"The output dtype must be complex128, got {out.dtype}")
    N = len(x)
    if N == 0:
        raise ValueError("The input sequence is empty")
    if len(out) < N:
        raise ValueError(f"The output sequence is too small: {len(out)} < {N}")
    if N & (N - 1) != 0:
        raise ValueError(f"The input length must be a power of two, got {N}")
    if np.shares_memory(x, out):
        raise ValueError("The output must not share memory with the input")


def fdft_array(x: np.ndarray, out: np.ndarray) -> None:
    """
    Forward DFT of a 1-D array, written into out[:N].

    Parameters
    ----------
    x : np.ndarray
        1-D input of length N (a power of two); coerced to complex128
    out : np.ndarray
        1-D complex128 buffer with at least N elements

    Raises
    ------
    ValueError
        If x is empty or not a power of two long, out is too small or not
        a 1-D complex128 array, or out shares memory with x.
    """
    x = np.asarray(x)
    _check_arrays(x, out)
    logger.debug("fdft_array: N=%d", len(x))
    _fft_radix2_iter(np.ascontiguousarray(x, dtype=np.complex128), out, False)


def idft_array(x: np.ndarray, out: np.ndarray) -> None:
    """
    Inverse DFT of a 1-D array, written into out[:N].

    Same restrictions as :func:`fdft_array`.
    """
    x = np.asarray(x)
    _check_arrays(x, out)
    logger.debug("idft_array: N=%d", len(x))
    _ifft_core(np.ascontiguousarray(x, dtype=np.complex128), out)


def fft(x: np.ndarray) -> np.ndarray:
    """
    Compute the 1-D discrete Fourier Transform of a power-of-two length signal.

    Examples
    --------
    >>> import numpy as np
    >>> x = np.array([1.0, 1.0, 1.0, 1.0, 0.0, 0.0, 0.0, 0.0])
    >>> X = fft(x)
    >>> # Should match scipy.fft.fft(x)
    """
    x = np.asarray(x)
    out = np.empty(x.shape[-1] if x.ndim else 0, dtype=np.complex128)
    fdft_array(x, out)
    return out


def ifft(x: np.ndarray) -> np.ndarray:
    """
    Compute the 1-D inverse discrete Fourier Transform.

    IFFT(x) = conj(FFT(conj(x))) / N
    """
    x = np.asarray(x)
    out = np.empty(x.shape[-1] if x.ndim else 0, dtype=np.complex128)
    idft_array(x, out)
    return out
