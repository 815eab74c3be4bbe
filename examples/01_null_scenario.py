"""
Null Indirect Effect Example
============================

This example runs the nested Monte Carlo / bootstrap study for one
mediation model whose indirect effect is zero (b = 0) and checks whether
the 95% interval of the bootstrap means of R²med contains zero.
"""

import r2medsim

# Example: X affects Y directly and M, but M has no effect on Y
# Research question: Does R²med report "no mediation" when there is none?

print("=" * 60)
print("NULL INDIRECT EFFECT EXAMPLE")
print("=" * 60)

# 1. Create the simulation (default seed 2137 for reproducibility)
sim = r2medsim.R2MedSimulation()

# 2. Set the structural paths
# a = 0.5: X -> M
# c' = 0.5: direct X -> Y
# b = 0: M -> Y, so the indirect effect a*b is zero
sim.set_paths("a=0.5, c'=0.5, b=0")

# 3. Sample size and Monte Carlo counts
# 200 replications x 200 resamples keeps the example quick;
# the study itself uses 1000 x 1000
sim.set_sample_size(200)
sim.set_simulations(200, bootstrap_samples=200)

print("\nModel setup complete:")
print(sim)

# 4. Run and print the detailed report
result = sim.run(summary="long")

# 5. Compare with the model-implied value
print("\n" + "=" * 60)
print("INTERPRETATION")
print("=" * 60)
print(f"Population R²med:      {result.population_r2med:.4f}")
print(f"Median bootstrap mean: {result.summary.median:.4f}")
if result.summary.contains_zero():
    print("The 95% interval contains zero.")
else:
    print("The 95% interval excludes zero even though the indirect effect is null.")

# 6. Per-replication means as a DataFrame
frame = result.to_frame()
print("\nFirst replications:")
print(frame.head())

# 7. Histogram (requires matplotlib)
# sim.plot_histogram(result)
