"""
Repeated-measurement simulation.

``SimulationEngine.run`` measures ``trials`` independent copies of a fixed
state and tallies the outcomes. Trials never depend on each other, so the
work can be split across threads: each worker gets its own child random
source and the per-worker tallies are summed.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from rquant.gates import Gate, apply
from rquant.measurement import NumpyRandomSource, RandomSource, measure_many
from rquant.register import QubitRegister
from rquant.state import QuantumState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tally:
    """
    Counts of observed outcomes.

    Attributes
    ----------
    zeros : int
        Number of trials that measured 0.
    ones : int
        Number of trials that measured 1.
    """

    zeros: int = 0
    ones: int = 0

    def __post_init__(self) -> None:
        if self.zeros < 0 or self.ones < 0:
            raise ValueError(f"Counts must be non-negative, got {self.zeros}, {self.ones}")

    @property
    def total(self) -> int:
        return self.zeros + self.ones

    @property
    def counts(self) -> dict[int, int]:
        """Mapping bit -> count."""
        return {0: self.zeros, 1: self.ones}

    def __getitem__(self, bit: int) -> int:
        if bit == 0:
            return self.zeros
        if bit == 1:
            return self.ones
        raise KeyError(f"Measurement outcome must be 0 or 1, got {bit!r}")

    def __add__(self, other: Tally) -> Tally:
        if not isinstance(other, Tally):
            return NotImplemented
        return Tally(self.zeros + other.zeros, self.ones + other.ones)

    def __str__(self) -> str:
        return f"0: {self.zeros}, 1: {self.ones} (total {self.total})"


def _split(trials: int, parts: int) -> list[int]:
    base, extra = divmod(trials, parts)
    return [base + 1 if i < extra else base for i in range(parts)]


class SimulationEngine:
    """
    Runs repeated measurements and tallies the results.

    Parameters
    ----------
    source : RandomSource | None
        Default random source for ``run``.
    seed : int | None
        Seed for a ``NumpyRandomSource``. Mutually exclusive with ``source``.
    workers : int
        Worker threads for ``run``. Only used when the source can
        ``spawn`` independent children; otherwise trials run serially.

    Example
    -------
    >>> engine = SimulationEngine(seed=7)
    >>> tally = engine.run(ONE, 1000)
    >>> tally.ones
    1000
    """

    def __init__(
        self,
        source: RandomSource | None = None,
        seed: int | None = None,
        workers: int = 1,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        if source is not None and seed is not None:
            raise ValueError("Pass either source or seed, not both")
        self.source = source if source is not None else NumpyRandomSource(seed)
        self.workers = workers

    def run(
        self,
        state: QuantumState,
        trials: int,
        source: RandomSource | None = None,
    ) -> Tally:
        """
        Measure ``trials`` independent copies of ``state``.

        Parameters
        ----------
        state : QuantumState
            Input state, never modified.
        trials : int
            Number of measurements. 0 gives an empty tally.
        source : RandomSource, optional
            Overrides the engine's source for this run.

        Returns
        -------
        Tally
        """
        if trials < 0:
            raise ValueError(f"trials must be non-negative, got {trials}")
        source = source if source is not None else self.source

        workers = min(self.workers, trials) if trials else 1
        if workers > 1 and hasattr(source, "spawn"):
            tally = self._run_parallel(state, trials, source, workers)
        else:
            zeros, ones = measure_many(state, trials, source)
            tally = Tally(zeros, ones)

        logger.debug("Ran %d trials on %s with %d worker(s): %s", trials, state, workers, tally)
        return tally

    def _run_parallel(
        self,
        state: QuantumState,
        trials: int,
        source: NumpyRandomSource,
        workers: int,
    ) -> Tally:
        children = source.spawn(workers)
        shares = _split(trials, workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(measure_many, state, n, child)
                for n, child in zip(shares, children)
            ]
            partials = [Tally(*f.result()) for f in futures]
        return sum(partials, Tally())

    def simulate_superposition(
        self,
        state: QuantumState,
        trials: int,
        source: RandomSource | None = None,
    ) -> Tally:
        """Apply SUPERPOSITION to ``state`` and measure the result ``trials`` times."""
        return self.run(apply(Gate.SUPERPOSITION, state), trials, source)

    def simulate_register(
        self,
        register: QubitRegister,
        trials: int,
        gate: Gate | str | None = Gate.SUPERPOSITION,
        source: RandomSource | None = None,
    ) -> list[Tally]:
        """
        One tally per register slot.

        Each slot is passed through ``gate`` (skipped when None) and then
        measured ``trials`` times. The register itself is not modified.
        """
        tallies = []
        for state in register:
            if gate is not None:
                state = apply(gate, state)
            tallies.append(self.run(state, trials, source))
        return tallies
