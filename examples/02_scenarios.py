"""
Scenario Comparison Example
===========================

This example runs the study presets side by side: six plausible
null-mediation scenarios and two unrealistic ones where X and M are nearly
collinear.
"""

import r2medsim

print("=" * 60)
print("SCENARIO COMPARISON EXAMPLE")
print("=" * 60)

print("\nAvailable presets:")
for preset_id, preset in r2medsim.PRESETS.items():
    print(f"  {preset_id}: {preset['name']} ({preset['description']})")

sim = r2medsim.R2MedSimulation()
sim.set_sample_size(200)
sim.set_simulations(100, bootstrap_samples=100)

# Runs every preset with the same N and Monte Carlo counts
results = sim.run_scenarios()

# Cancel after a given number of chunks (e.g. from a GUI "Stop" button)
print("\n" + "=" * 60)
print("CANCELLATION")
print("=" * 60)
percents = []
try:
    sim.use_preset("u1").run(
        print_results=False,
        progress_callback=percents.append,
        cancel_check=lambda: len(percents) >= 3,
    )
except r2medsim.SimulationCancelled:
    print(f"Cancelled at {percents[-1]:.1f}%")
