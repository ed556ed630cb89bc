"""Initial medoid selection strategies."""

from .base import BaseSeeder, check_num_clusters, check_seeds
from .kmpp import KMeansPlusPlusSeeder
from .uniform import UniformSeeder
