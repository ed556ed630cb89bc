"""
kmedoid: K-medoid clustering on pre-computed cost matrices

Partitioning Around Medoids with k-means++ or uniform seeding,
configurable convergence control, and sanity checks on the result.
"""

__version__ = "0.1.0"

from .core.errors import KMedoidError, InvalidConfig, OutOfRange, DegenerateCluster
from .core.matrix import CostMatrixView
from .core.types import Assignment, KMedoidResult, LoopState, RunReport
from .core.registry import Registry, get_registry
from .config.schema import KMedoidOptions, parse_options
from .assignment import assign
from .update import update_medoids, best_medoid
from .runner.run_one import OptimizationLoop, run_kmedoid, run_from_config

from . import seeding
from . import metrics
