"""Evaluation metrics and sanity checks for clustering results."""

from .clustering import compute_clustering_metrics, adjusted_rand_index, b3_scores
from .sanity import run_sanity_checks
