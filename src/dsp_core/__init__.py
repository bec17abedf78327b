"""
DSP Core Module - Complex Values and Cooley-Tukey Fourier Transforms

Hand-written building blocks for frequency-domain signal processing, meant to
be called by higher-level filtering and spectral-analysis code.

Modules:
    - complex128: 128-bit complex value type
    - dft: Forward/inverse DFT over Complex128 sequences (recursive FFT)
    - fft: Forward/inverse DFT over complex128 ndarrays (Numba JIT)
    - benchmark: Timing and accuracy cross-check against scipy
"""

from .complex128 import Complex128
from .dft import fdft, idft
from .fft import fdft_array, idft_array, fft, ifft

__all__ = [
    # Complex values
    'Complex128',
    # Sequence transforms
    'fdft',
    'idft',
    # Array transforms
    'fdft_array',
    'idft_array',
    'fft',
    'ifft',
]

__version__ = '1.0.0'
