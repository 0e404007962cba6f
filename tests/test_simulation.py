"""Tests for the simulation engine and tallies."""

import logging

import pytest

from rquant import (
    ONE,
    ZERO,
    Gate,
    NumpyRandomSource,
    QuantumState,
    QubitRegister,
    ScriptedRandomSource,
    SimulationEngine,
    Tally,
    apply,
)


@pytest.fixture
def engine():
    return SimulationEngine(seed=42)


# ---------------------------------------------------------------------------
# Tally
# ---------------------------------------------------------------------------

def test_tally_total():
    t = Tally(3, 7)
    assert t.total == 10
    assert t[0] + t[1] == t.total
    assert t.counts == {0: 3, 1: 7}


def test_tally_bad_bit():
    with pytest.raises(KeyError):
        Tally(1, 1)[2]


def test_tally_negative_count():
    with pytest.raises(ValueError):
        Tally(-1, 0)


def test_tally_merge():
    a, b, c = Tally(1, 2), Tally(3, 4), Tally(5, 6)
    assert a + b == Tally(4, 6)
    assert (a + b) + c == a + (b + c)
    assert a + b == b + a


def test_tally_str():
    assert str(Tally(2, 3)) == "0: 2, 1: 3 (total 5)"


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def test_zero_trials(engine):
    tally = engine.run(ONE, 0)
    assert tally.total == 0
    assert tally == Tally(0, 0)


def test_negative_trials(engine):
    with pytest.raises(ValueError):
        engine.run(ONE, -5)


def test_invalid_workers():
    with pytest.raises(ValueError):
        SimulationEngine(workers=0)


def test_source_and_seed_are_exclusive():
    with pytest.raises(ValueError, match="source or seed"):
        SimulationEngine(source=NumpyRandomSource(seed=1), seed=2)


def test_boundary_states(engine):
    assert engine.run(ZERO, 1000) == Tally(1000, 0)
    assert engine.run(ONE, 1000) == Tally(0, 1000)


@pytest.mark.parametrize("state,p", [
    (ZERO, 0.0),
    (apply(Gate.SUPERPOSITION, ZERO), 0.5),
    (ONE, 1.0),
])
def test_million_trials_match_theory(state, p):
    tally = SimulationEngine(seed=2024).run(state, 1_000_000)
    assert tally.total == 1_000_000
    assert tally.ones / tally.total == pytest.approx(p, abs=0.01)


def test_superposition_of_one_is_balanced(engine):
    tally = engine.run(apply(Gate.SUPERPOSITION, ONE), 100_000)
    assert tally.zeros / tally.total == pytest.approx(0.5, abs=0.01)
    assert tally.ones / tally.total == pytest.approx(0.5, abs=0.01)


def test_seed_reproducible(plus):
    a = SimulationEngine(seed=9).run(plus, 5000)
    b = SimulationEngine(seed=9).run(plus, 5000)
    assert a == b


def test_run_source_override(engine):
    state = QuantumState(0.8, 0.6)
    tally = engine.run(state, 4, source=ScriptedRandomSource([0.1, 0.9]))
    assert tally == Tally(2, 2)


def test_state_unchanged_by_run(engine, plus):
    engine.run(plus, 1000)
    assert plus == apply(Gate.SUPERPOSITION, ZERO)


# ---------------------------------------------------------------------------
# Parallel runs
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("trials", [1, 3, 10, 100_001])
def test_parallel_total(plus, trials):
    tally = SimulationEngine(seed=1, workers=4).run(plus, trials)
    assert tally.total == trials


def test_parallel_frequency():
    state = QuantumState(0.8, 0.6)
    tally = SimulationEngine(seed=1, workers=4).run(state, 400_000)
    assert tally.ones / tally.total == pytest.approx(0.36, abs=0.01)


def test_parallel_reproducible(plus):
    a = SimulationEngine(seed=5, workers=3).run(plus, 30_000)
    b = SimulationEngine(seed=5, workers=3).run(plus, 30_000)
    assert a == b


def test_parallel_falls_back_without_spawn(plus):
    """A scripted source cannot be split, so trials run serially."""
    engine = SimulationEngine(source=ScriptedRandomSource([0.25, 0.75]), workers=4)
    assert engine.run(plus, 10) == Tally(5, 5)


# ---------------------------------------------------------------------------
# Superposition helpers
# ---------------------------------------------------------------------------

def test_simulate_superposition(engine):
    tally = engine.simulate_superposition(ONE, 50_000)
    assert tally.ones / tally.total == pytest.approx(0.5, abs=0.01)


def test_simulate_register(engine):
    reg = QubitRegister(3)
    reg.apply_gate(Gate.NOT, 2)
    tallies = engine.simulate_register(reg, 20_000)
    assert len(tallies) == 3
    for t in tallies:
        assert t.total == 20_000
        assert t.ones / t.total == pytest.approx(0.5, abs=0.02)
    assert reg.get(0) == ZERO
    assert reg.get(2) == ONE


def test_simulate_register_without_gate(engine):
    reg = QubitRegister(2)
    reg.apply_gate(Gate.NOT, 1)
    tallies = engine.simulate_register(reg, 100, gate=None)
    assert tallies == [Tally(100, 0), Tally(0, 100)]


def test_simulate_empty_register(engine):
    assert engine.simulate_register(QubitRegister(0), 100) == []


def test_run_logs_debug(engine, caplog):
    with caplog.at_level(logging.DEBUG, logger="rquant.simulation"):
        engine.run(ONE, 10)
    assert "Ran 10 trials" in caplog.text


def test_default_source_is_numpy():
    assert isinstance(SimulationEngine().source, NumpyRandomSource)
