"""Single runs and parameter grids."""

from .run_one import OptimizationLoop, run_kmedoid, run_from_config
from .run_grid import run_grid
