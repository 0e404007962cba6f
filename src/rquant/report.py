"""
Comparison of simulated frequencies against Born-rule probabilities.

Usage:
    from rquant import ONE, Gate, apply, SimulationEngine, SimulationReport

    state = apply(Gate.SUPERPOSITION, ONE)
    tally = SimulationEngine(seed=1).run(state, 10_000)
    report = SimulationReport.build(tally, state)
    print(report)
    report.is_consistent()  # True unless the sample is wildly off
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from scipy import stats

from rquant.measurement import probability_of_one
from rquant.simulation import Tally
from rquant.state import QuantumState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationReport:
    """
    Read-only summary of a tally against its source state.

    Attributes
    ----------
    tally : Tally
        Observed outcome counts.
    source : QuantumState
        State the theoretical probabilities are derived from.
    label : str
        Name of the source qubit used when rendering.
    """

    tally: Tally
    source: QuantumState
    label: str = ""

    # Holds an unhashable QuantumState
    __hash__ = None

    @classmethod
    def build(
        cls,
        tally: Tally,
        source: QuantumState,
        label: str | None = None,
    ) -> SimulationReport:
        """Create a report; ``label`` defaults to the state's text form."""
        return cls(tally=tally, source=source, label=label if label is not None else str(source))

    @property
    def total(self) -> int:
        return self.tally.total

    def observed_frequency(self, bit: int) -> float:
        """Fraction of trials that measured ``bit`` (0.0 for an empty tally)."""
        count = self.tally[bit]
        if self.total == 0:
            return 0.0
        return count / self.total

    def theoretical_probability(self, bit: int) -> float:
        """Born-rule probability of ``bit`` for the source state."""
        p1 = probability_of_one(self.source)
        if bit == 1:
            return p1
        if bit == 0:
            return 1.0 - p1
        raise KeyError(f"Measurement outcome must be 0 or 1, got {bit!r}")

    def deviation(self, bit: int) -> float:
        """observed - theoretical for ``bit``."""
        return self.observed_frequency(bit) - self.theoretical_probability(bit)

    def max_deviation(self) -> float:
        if self.total == 0:
            return 0.0
        return max(abs(self.deviation(0)), abs(self.deviation(1)))

    def p_value(self) -> float:
        """
        Two-sided exact binomial test of the observed ones against p1.

        Returns 1.0 for an empty tally (no evidence either way).
        """
        if self.total == 0:
            return 1.0
        result = stats.binomtest(
            self.tally.ones, self.total, self.theoretical_probability(1)
        )
        return float(result.pvalue)

    def is_consistent(self, alpha: float = 1e-3) -> bool:
        """True when the binomial test does not reject at level ``alpha``."""
        return self.p_value() >= alpha

    def rows(self) -> list[tuple[int, int, float, float]]:
        """(bit, count, observed frequency, theoretical probability) per bit."""
        return [
            (bit, self.tally[bit], self.observed_frequency(bit), self.theoretical_probability(bit))
            for bit in (0, 1)
        ]

    def render(self) -> str:
        lines = [f"Simulation report for {self.label}"]
        for bit, count, observed, expected in self.rows():
            lines.append(
                f"  {bit} : {count:>10d}  observed {100 * observed:6.2f}%"
                f"  theoretical {100 * expected:6.2f}%"
            )
        lines.append(f"  total : {self.total}")
        return "\n".join(lines)

    def log(self, log: logging.Logger | None = None) -> None:
        """Emit the rendered report at INFO level."""
        (log or logger).info("%s", self.render())

    def __str__(self) -> str:
        return self.render()
