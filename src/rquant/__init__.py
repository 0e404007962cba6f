"""
rquant: single-qubit states, gates, measurement and simulation.

Quick Start:
    >>> from rquant import ONE, Gate, apply, SimulationEngine, SimulationReport
    >>> state = apply(Gate.SUPERPOSITION, ONE)
    >>> tally = SimulationEngine(seed=42).run(state, 1000)
    >>> print(SimulationReport.build(tally, state))
"""
__version__ = "0.1.0"

from .errors import QuantumError, InvalidStateError, IndexOutOfRangeError
from .state import (
    QuantumState,
    ZERO,
    ONE,
    FLIP,
    HALF_TURN,
    BACK_HALF_TURN,
    TOLERANCE,
    magnitude_squared,
)
from .gates import Gate, apply, apply_not, get_gate, is_unitary
from .measurement import (
    RandomSource,
    NumpyRandomSource,
    ScriptedRandomSource,
    measure,
    measure_many,
)
from .register import QubitRegister
from .simulation import SimulationEngine, Tally
from .report import SimulationReport

__all__ = [
    # Errors
    'QuantumError',
    'InvalidStateError',
    'IndexOutOfRangeError',
    # States
    'QuantumState',
    'ZERO',
    'ONE',
    'FLIP',
    'HALF_TURN',
    'BACK_HALF_TURN',
    'TOLERANCE',
    'magnitude_squared',
    # Gates
    'Gate',
    'apply',
    'apply_not',
    'get_gate',
    'is_unitary',
    # Measurement
    'RandomSource',
    'NumpyRandomSource',
    'ScriptedRandomSource',
    'measure',
    'measure_many',
    # Simulation
    'QubitRegister',
    'SimulationEngine',
    'Tally',
    'SimulationReport',
]
