"""Fixed-size register of independent qubits."""

from __future__ import annotations

from typing import Iterator

from rquant.errors import IndexOutOfRangeError
from rquant.gates import Gate, apply
from rquant.state import ZERO, QuantumState


class QubitRegister:
    """
    Ordered collection of independent single-qubit states.

    Every slot starts as |0⟩. The length is fixed at construction.
    Applying a gate replaces one slot; no entanglement is modeled, so
    the other slots never change.

    Example
    -------
    >>> reg = QubitRegister(3)
    >>> _ = reg.apply_gate(Gate.NOT, 1)
    >>> print(reg.get(1))
    (0.000 + 0.000i)|0⟩ + (1.000 + 0.000i)|1⟩
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"Register size must be non-negative, got {size}")
        self._states: list[QuantumState] = [ZERO] * size

    def __len__(self) -> int:
        return len(self._states)

    def len(self) -> int:
        """Number of qubits in the register."""
        return len(self._states)

    def is_empty(self) -> bool:
        return not self._states

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._states):
            raise IndexOutOfRangeError(index, len(self._states))

    def get(self, index: int) -> QuantumState:
        """State in slot ``index``."""
        self._check_index(index)
        return self._states[index]

    __getitem__ = get

    def apply_gate(self, gate: Gate | str, index: int) -> QuantumState:
        """Replace slot ``index`` with the gate's output and return it."""
        self._check_index(index)
        new_state = apply(gate, self._states[index])
        self._states[index] = new_state
        return new_state

    @property
    def states(self) -> tuple[QuantumState, ...]:
        """Snapshot of all slots."""
        return tuple(self._states)

    def __iter__(self) -> Iterator[QuantumState]:
        return iter(tuple(self._states))

    def __str__(self) -> str:
        return "<" + ", ".join(str(s) for s in self._states) + ">"

    def __repr__(self) -> str:
        return f"QubitRegister(size={len(self._states)})"
