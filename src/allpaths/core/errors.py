from __future__ import annotations


class AllPathsError(Exception):
    pass


class MissingNodeError(AllPathsError, KeyError):
    def __init__(self, node: object, role: str = "node") -> None:
        super().__init__(f"{role} {node!r} is not present in the explored map")
        self.node = node
        self.role = role

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidEdgeCostError(AllPathsError, ValueError):
    def __init__(self, cost: object, source: object = None, target: object = None) -> None:
        super().__init__(f"edge cost must be a non-negative integer, got {cost!r}")
        self.cost = cost
        self.source = source
        self.target = target


class InfeasibleBaselineError(AllPathsError):
    """Start and goal are disconnected before any unknown obstacle is placed."""
