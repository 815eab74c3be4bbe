from setuptools import setup, find_packages

setup(
    name="R2MedSim",
    version="0.1.0",
    packages=find_packages(include=["r2medsim", "r2medsim.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pandas",
        "matplotlib",
    ],
    extras_require={
        "JIT": ["numba"],
        "parallel": ["joblib"],
        "progress": ["tqdm"],
        "test": ["pytest", "scipy", "scikit-learn", "joblib", "tqdm"],
    },
    description="Monte Carlo bootstrap study of the R2med mediation effect size",
)
