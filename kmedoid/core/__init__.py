"""Core types, errors, registry, and utilities."""

from .errors import KMedoidError, InvalidConfig, OutOfRange, DegenerateCluster
from .matrix import CostMatrixView
from .types import Assignment, UpdateResult, IterationRecord, KMedoidResult, LoopState
from .registry import Registry, get_registry
from .random import set_seed, get_rng, resolve_rng
