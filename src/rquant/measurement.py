"""
Computational-basis measurement of a single qubit.

Measurement follows the Born rule: with p1 = |beta|^2, a uniform draw
u in [0, 1) yields 1 if u < p1, else 0. The random source is always
passed in, so a seeded or scripted source makes results reproducible.

Measurement does not change the state object; repeated measurements of
the same state are independent samples.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

import numpy as np
from numpy import ndarray

from rquant.state import QuantumState, magnitude_squared

# Draws per batch for vectorised sampling
CHUNK_SIZE = 1 << 16


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can produce uniform floats in [0, 1)."""

    def random(self) -> float:
        ...


class NumpyRandomSource:
    """
    Random source backed by ``numpy.random.Generator``.

    Parameters
    ----------
    seed : int | None
        Seed for ``numpy.random.default_rng``. None draws fresh entropy.
    """

    def __init__(self, seed: int | None = None, *, rng: np.random.Generator | None = None) -> None:
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def random(self) -> float:
        return float(self._rng.random())

    def random_array(self, n: int) -> ndarray:
        """``n`` independent draws in [0, 1)."""
        return self._rng.random(n)

    def spawn(self, n: int) -> list[NumpyRandomSource]:
        """Independent child sources, one per worker."""
        return [NumpyRandomSource(rng=child) for child in self._rng.spawn(n)]

    def __repr__(self) -> str:
        return f"NumpyRandomSource({self._rng.bit_generator.__class__.__name__})"


class ScriptedRandomSource:
    """
    Replays a fixed sequence of draws, cycling when exhausted.

    Useful for tests that need an exact outcome sequence.
    """

    def __init__(self, values: Iterable[float]) -> None:
        self._values = [float(v) for v in values]
        if not self._values:
            raise ValueError("ScriptedRandomSource needs at least one value")
        for v in self._values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"Scripted draw {v} outside [0, 1)")
        self._pos = 0

    def random(self) -> float:
        v = self._values[self._pos]
        self._pos = (self._pos + 1) % len(self._values)
        return v

    @property
    def draws(self) -> int:
        """Position in the script (wraps)."""
        return self._pos


def probability_of_one(state: QuantumState) -> float:
    """|beta|^2 clamped to [0, 1]."""
    return min(max(magnitude_squared(state.beta), 0.0), 1.0)


def measure(state: QuantumState, source: RandomSource) -> int:
    """
    Measure a qubit in the computational basis.

    Parameters
    ----------
    state : QuantumState
        State to observe. Not modified.
    source : RandomSource
        Supplies one uniform draw in [0, 1).

    Returns
    -------
    int
        Classical bit, 0 or 1.
    """
    p1 = probability_of_one(state)
    return 1 if source.random() < p1 else 0


def measure_many(state: QuantumState, trials: int, source: RandomSource) -> tuple[int, int]:
    """
    Measure ``trials`` independent copies of a state.

    Uses batched draws when the source offers ``random_array``; otherwise
    falls back to one ``measure`` call per trial.

    Returns
    -------
    tuple[int, int]
        Counts of (zeros, ones).
    """
    if trials < 0:
        raise ValueError(f"trials must be non-negative, got {trials}")

    ones = 0
    if hasattr(source, "random_array"):
        p1 = probability_of_one(state)
        remaining = trials
        while remaining > 0:
            n = min(remaining, CHUNK_SIZE)
            ones += int(np.count_nonzero(source.random_array(n) < p1))
            remaining -= n
    else:
        for _ in range(trials):
            ones += measure(state, source)
    return trials - ones, ones
