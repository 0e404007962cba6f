"""Example: measure |0⟩, |1⟩ and H|1⟩ many times and compare with theory."""
import logging

from rquant import ONE, ZERO, Gate, QubitRegister, SimulationEngine, SimulationReport, apply, apply_not

logging.basicConfig(level=logging.INFO, format="%(message)s")

print("=" * 50)
print("rquant: Superposition Example")
print("=" * 50)

print(f"\nZero qubit:           {ZERO}")
print(f"One qubit:            {ONE}")
print(f"NOT applied to zero:  {apply_not(ZERO)}")
print(f"NOT applied to one:   {apply_not(ONE)}")

print("\nSUPERPOSITION gate:")
print(Gate.SUPERPOSITION.render())

engine = SimulationEngine(seed=42, workers=4)
state = apply(Gate.SUPERPOSITION, ONE)
tally = engine.run(state, 100_000)
SimulationReport.build(tally, state, label="H|1⟩").log()

reg = QubitRegister(3)
reg.apply_gate(Gate.NOT, 1)
print(f"\nRegister: {reg}")
for i, t in enumerate(engine.simulate_register(reg, 10_000)):
    SimulationReport.build(t, apply(Gate.SUPERPOSITION, reg.get(i)), label=f"H q[{i}]").log()

print("\nExpected: ~50% |0⟩ and ~50% |1⟩ for every superposed qubit")
