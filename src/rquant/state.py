"""
Single-qubit state vectors.

A state is a pair of complex amplitudes (alpha, beta) over the
computational basis |0⟩, |1⟩ with |alpha|^2 + |beta|^2 = 1.

States are immutable values: gates return new states, and measurement
only reads them.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy import ndarray

from rquant.errors import InvalidStateError

# Type alias
Amplitude = complex

# Allowed drift of |alpha|^2 + |beta|^2 away from 1
TOLERANCE = 1e-9


def magnitude_squared(a: Amplitude) -> float:
    """Squared modulus re*re + im*im of an amplitude."""
    a = complex(a)
    return a.real * a.real + a.imag * a.imag


def is_normalized(alpha: Amplitude, beta: Amplitude, tol: float = TOLERANCE) -> bool:
    """Check the normalization law |alpha|^2 + |beta|^2 = 1."""
    return abs(magnitude_squared(alpha) + magnitude_squared(beta) - 1.0) <= tol


def format_amplitude(a: Amplitude, precision: int = 3) -> str:
    """Render an amplitude as ``a + bi``."""
    a = complex(a)
    re, im = a.real, a.imag
    # Avoid printing -0.000
    if abs(re) < 0.5 * 10 ** -precision:
        re = 0.0
    if abs(im) < 0.5 * 10 ** -precision:
        im = 0.0
    sign = "-" if im < 0 else "+"
    return f"{re:.{precision}f} {sign} {abs(im):.{precision}f}i"


class QuantumState:
    """
    Immutable single-qubit state alpha|0⟩ + beta|1⟩.

    Parameters
    ----------
    alpha : complex
        Amplitude of |0⟩.
    beta : complex
        Amplitude of |1⟩.

    Raises
    ------
    InvalidStateError
        If |alpha|^2 + |beta|^2 differs from 1 by more than ``TOLERANCE``.

    Example
    -------
    >>> s = QuantumState(0.6, 0.8j)
    >>> print(s)
    (0.600 + 0.000i)|0⟩ + (0.000 + 0.800i)|1⟩
    """

    __slots__ = ("_alpha", "_beta")

    def __init__(self, alpha: Amplitude, beta: Amplitude) -> None:
        alpha, beta = complex(alpha), complex(beta)
        if not is_normalized(alpha, beta):
            total = magnitude_squared(alpha) + magnitude_squared(beta)
            raise InvalidStateError(
                f"|alpha|^2 + |beta|^2 = {total!r}, expected 1 (tolerance {TOLERANCE})"
            )
        object.__setattr__(self, "_alpha", alpha)
        object.__setattr__(self, "_beta", beta)

    @classmethod
    def _unchecked(cls, alpha: Amplitude, beta: Amplitude) -> QuantumState:
        """Build a state without the normalization check."""
        state = object.__new__(cls)
        object.__setattr__(state, "_alpha", complex(alpha))
        object.__setattr__(state, "_beta", complex(beta))
        return state

    @classmethod
    def from_vector(cls, vector: Sequence[complex] | ndarray) -> QuantumState:
        """Build a validated state from a length-2 vector."""
        v = np.asarray(vector, dtype=np.complex128)
        if v.shape != (2,):
            raise ValueError(f"State vector shape {v.shape} != expected (2,)")
        return cls(complex(v[0]), complex(v[1]))

    def __setattr__(self, name, value):
        raise AttributeError("QuantumState is immutable")

    def __reduce__(self):
        return (_restore, (self._alpha, self._beta))

    @property
    def alpha(self) -> complex:
        """Amplitude of |0⟩."""
        return self._alpha

    @property
    def beta(self) -> complex:
        """Amplitude of |1⟩."""
        return self._beta

    @property
    def vector(self) -> ndarray:
        """State as a complex128 array [alpha, beta]."""
        return np.array([self._alpha, self._beta], dtype=np.complex128)

    def norm_squared(self) -> float:
        return magnitude_squared(self._alpha) + magnitude_squared(self._beta)

    def probabilities(self) -> tuple[float, float]:
        """Born-rule probabilities (p0, p1) in the computational basis."""
        return magnitude_squared(self._alpha), magnitude_squared(self._beta)

    def isclose(self, other: QuantumState, tol: float = TOLERANCE) -> bool:
        """Componentwise amplitude comparison within ``tol``."""
        return (
            abs(self._alpha - other._alpha) <= tol
            and abs(self._beta - other._beta) <= tol
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuantumState):
            return NotImplemented
        return self.isclose(other)

    __hash__ = None  # equality is tolerance-based

    def __iter__(self):
        yield self._alpha
        yield self._beta

    def __str__(self) -> str:
        return (
            f"({format_amplitude(self._alpha)})|0⟩ + "
            f"({format_amplitude(self._beta)})|1⟩"
        )

    def __repr__(self) -> str:
        return f"QuantumState(alpha={self._alpha!r}, beta={self._beta!r})"


def _restore(alpha: complex, beta: complex) -> QuantumState:
    """Rebuild a copied or unpickled state without re-validating it."""
    return QuantumState._unchecked(alpha, beta)


# ---------------------------------------------------------------------------
# Canonical states
# ---------------------------------------------------------------------------

ZERO = QuantumState._unchecked(1, 0)
"""|0⟩"""

ONE = QuantumState._unchecked(0, 1)
"""|1⟩"""

FLIP = QuantumState._unchecked(0, -1)
"""-|1⟩, PHASE applied to |1⟩."""

HALF_TURN = QuantumState._unchecked(0, 1j)
"""i|1⟩, FLIP applied to |0⟩."""

BACK_HALF_TURN = QuantumState._unchecked(0, -1j)
"""-i|1⟩"""
