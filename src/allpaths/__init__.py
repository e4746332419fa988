"""allpaths: tie-preserving label-correcting search over grid-induced graphs.

Public API:
- search / LabelCorrectingSearch producing an Explored map of cost records
- reconstruct / reconstruct_path over the predecessor sets
- evaluate_shortcut and the shortcut enumeration helpers
- find_first_blocking_obstacle for monotone obstacle growth
- Grid, TerrainGrid, OrientedGrid node spaces
"""
from .core.errors import (
    AllPathsError,
    InfeasibleBaselineError,
    InvalidEdgeCostError,
    MissingNodeError,
)
from .core.types import CostRecord, OrientedNode
from .feasibility import (
    IncrementalFeasibilitySearch,
    find_first_blocking_obstacle,
    first_blocking_linear,
    is_feasible,
)
from .grid import Grid, OrientedGrid, TerrainGrid, TurnCosts
from .reconstruct import reconstruct, reconstruct_path
from .search import (
    Explored,
    LabelCorrectingSearch,
    SearchParams,
    SearchStats,
    best_terminal,
    search,
)
from .shortcuts import (
    Shortcut,
    count_shortcuts,
    enumerate_shortcuts,
    evaluate_shortcut,
    tally_savings,
)
from . import scenarios

__all__ = [
    "AllPathsError", "InfeasibleBaselineError", "InvalidEdgeCostError", "MissingNodeError",
    "CostRecord", "OrientedNode", "Explored", "LabelCorrectingSearch", "SearchParams",
    "SearchStats", "best_terminal", "search", "reconstruct", "reconstruct_path",
    "Shortcut", "count_shortcuts", "enumerate_shortcuts", "evaluate_shortcut", "tally_savings",
    "IncrementalFeasibilitySearch", "find_first_blocking_obstacle", "first_blocking_linear",
    "is_feasible", "Grid", "OrientedGrid", "TerrainGrid", "TurnCosts", "scenarios",
]

__version__ = "0.1.0"
