"""
Quantum gate definitions.

Every gate is a fixed 2x2 unitary matrix (numpy array, read-only).
The set is closed: gates are members of the ``Gate`` enumeration and are
looked up by name, never registered at runtime.

Gates:
    - NOT: Pauli-X, swaps the |0⟩ and |1⟩ amplitudes
    - FLIP: Pauli-Y, 180 degree turn about the Y-axis
    - PHASE: Pauli-Z, flips the sign of the |1⟩ amplitude
    - ROTATE: quarter turn about the Y-axis (real, Hadamard-like)
    - SUPERPOSITION: Hadamard, |0⟩ -> |+⟩ and |1⟩ -> |−⟩
"""

from __future__ import annotations

import enum

import numpy as np
from numpy import ndarray

from rquant.state import QuantumState

# Type alias
Matrix = ndarray

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_SQRT2_INV = 1.0 / np.sqrt(2.0)


def _frozen(rows) -> Matrix:
    m = np.array(rows, dtype=np.complex128)
    m.setflags(write=False)
    return m


# ---------------------------------------------------------------------------
# Gate matrices
# ---------------------------------------------------------------------------

X = _frozen([[0, 1], [1, 0]])
"""Pauli-X (NOT) matrix."""

Y = _frozen([[0, -1j], [1j, 0]])
"""Pauli-Y (FLIP) matrix."""

Z = _frozen([[1, 0], [0, -1]])
"""Pauli-Z (PHASE) matrix."""

R = _frozen([[_SQRT2_INV, -_SQRT2_INV], [_SQRT2_INV, _SQRT2_INV]])
"""Ry(pi/2) (ROTATE) matrix."""

H = _frozen([[_SQRT2_INV, _SQRT2_INV], [_SQRT2_INV, -_SQRT2_INV]])
"""Hadamard (SUPERPOSITION) matrix."""


class Gate(enum.Enum):
    """Closed set of single-qubit gates."""

    NOT = "not"
    FLIP = "flip"
    PHASE = "phase"
    ROTATE = "rotate"
    SUPERPOSITION = "superposition"

    @property
    def matrix(self) -> Matrix:
        """The gate's 2x2 unitary matrix."""
        return _MATRICES[self]

    def render(self, precision: int = 3) -> str:
        """Two-row text rendering of the matrix."""
        cells = [[_format_entry(z, precision) for z in row] for row in self.matrix]
        width = max(len(c) for row in cells for c in row)
        return "\n".join(
            "[ " + "  ".join(c.rjust(width) for c in row) + " ]" for row in cells
        )

    def __str__(self) -> str:
        return self.name


_MATRICES: dict[Gate, Matrix] = {
    Gate.NOT: X,
    Gate.FLIP: Y,
    Gate.PHASE: Z,
    Gate.ROTATE: R,
    Gate.SUPERPOSITION: H,
}

# Short names accepted by get_gate alongside the member names
_ALIASES: dict[str, Gate] = {
    "x": Gate.NOT,
    "y": Gate.FLIP,
    "z": Gate.PHASE,
    "r": Gate.ROTATE,
    "h": Gate.SUPERPOSITION,
    "hadamard": Gate.SUPERPOSITION,
}


def _format_entry(z: complex, precision: int) -> str:
    re = 0.0 if abs(z.real) < 0.5 * 10 ** -precision else z.real
    im = 0.0 if abs(z.imag) < 0.5 * 10 ** -precision else z.imag
    if im == 0.0:
        return f"{re:.{precision}f}"
    if re == 0.0:
        return f"{im:.{precision}f}i"
    sign = "-" if im < 0 else "+"
    return f"{re:.{precision}f}{sign}{abs(im):.{precision}f}i"


def get_gate(name: str) -> Gate:
    """
    Look up a gate by name (case-insensitive).

    Parameters
    ----------
    name : str
        Member name (``"not"``, ``"superposition"``, ...) or short alias
        (``"x"``, ``"y"``, ``"z"``, ``"r"``, ``"h"``).

    Raises
    ------
    KeyError
        If the name matches no gate.
    """
    key = name.strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return Gate(key)
    except ValueError:
        available = sorted([g.value for g in Gate] + list(_ALIASES))
        raise KeyError(f"Unknown gate: '{name}'. Available: {available}") from None


def apply(gate: Gate | str, state: QuantumState) -> QuantumState:
    """
    Apply a gate to a state, returning the new state.

    Computes [[m00, m01], [m10, m11]] . [alpha, beta]^T. The result is not
    re-checked for normalization: every gate matrix is unitary, so a
    normalized input stays normalized.
    """
    if isinstance(gate, str):
        gate = get_gate(gate)
    m = gate.matrix
    alpha, beta = state.alpha, state.beta
    return QuantumState._unchecked(
        m[0, 0] * alpha + m[0, 1] * beta,
        m[1, 0] * alpha + m[1, 1] * beta,
    )


def apply_not(state: QuantumState) -> QuantumState:
    """Shorthand for ``apply(Gate.NOT, state)``."""
    return apply(Gate.NOT, state)


def is_unitary(m: Matrix, tol: float = 1e-12) -> bool:
    """Check U†U = I."""
    m = np.asarray(m)
    product = m.conj().T @ m
    return np.allclose(product, np.eye(m.shape[0]), atol=tol)
