"""Statistical kernels: normal deviates, data generation, R²med, summaries."""

from . import data_generation as data_generation
from . import distributions as distributions
from . import r2med as r2med
from . import summary as summary
