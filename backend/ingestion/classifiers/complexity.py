"""Complexity tier, shared by every producer of template records."""

from core.constants import Complexity

BEGINNER_MAX_NODES = 3
INTERMEDIATE_MAX_NODES = 7


def determine_complexity(node_count: int) -> Complexity:
    """Map a workflow's node count to its complexity tier."""
    if node_count <= BEGINNER_MAX_NODES:
        return Complexity.BEGINNER
    if node_count <= INTERMEDIATE_MAX_NODES:
        return Complexity.INTERMEDIATE
    return Complexity.ADVANCED
