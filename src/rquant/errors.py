"""Exceptions raised by rquant."""


class QuantumError(Exception):
    """Base class for rquant errors."""


class InvalidStateError(QuantumError, ValueError):
    """Amplitudes do not satisfy |alpha|^2 + |beta|^2 = 1."""


class IndexOutOfRangeError(QuantumError, IndexError):
    """Register slot does not exist."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Qubit index {index} out of range for register of size {size}")
        self.index = index
        self.size = size
