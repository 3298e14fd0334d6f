"""Coverage analysis services."""

from .analysis import OfficeCoverage, analyze_coverage, office_coverage
from .areas import boundary_centroid, centroid_or_vertex_heuristic, covered_areas
from .clustering import (
    ClusteringStrategy,
    ConnectedComponentsClustering,
    GreedyOverlapClustering,
    get_clustering_strategy,
)
from .containment import categorize_layer_b_offices, categorize_layer_c_offices, is_within_any_layer_a
from .radius import DEFAULT_MANAGEMENT_RADIUS_KM, governing_radius

__all__ = [
    "analyze_coverage",
    "office_coverage",
    "OfficeCoverage",
    "boundary_centroid",
    "centroid_or_vertex_heuristic",
    "covered_areas",
    "ClusteringStrategy",
    "GreedyOverlapClustering",
    "ConnectedComponentsClustering",
    "get_clustering_strategy",
    "is_within_any_layer_a",
    "categorize_layer_b_offices",
    "categorize_layer_c_offices",
    "governing_radius",
    "DEFAULT_MANAGEMENT_RADIUS_KM",
]
