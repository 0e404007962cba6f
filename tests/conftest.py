"""Shared fixtures."""

import numpy as np
import pytest

from rquant import NumpyRandomSource, QuantumState


@pytest.fixture
def source():
    return NumpyRandomSource(seed=42)


@pytest.fixture
def plus():
    """|+⟩ = (|0⟩ + |1⟩)/√2"""
    return QuantumState(1 / np.sqrt(2), 1 / np.sqrt(2))
