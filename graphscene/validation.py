"""
Graph validation - Check graphs for structural issues.

The composer never fails on these issues; it drops dangling edges and
degrades the layout of cyclic graphs. Validation lets callers see what
was dropped or degraded before exporting a scene.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .layout import topological_order

if TYPE_CHECKING:
    from .models import Graph


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # Invalid state, must be fixed
    WARNING = "warning"  # Output is degraded or content is dropped
    INFO = "info"        # Informational, may be intentional


@dataclass
class ValidationIssue:
    """A single validation issue found in a graph."""
    severity: IssueSeverity
    message: str
    node_id: str | None = None
    edge_id: str | None = None
    container_id: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message
        }
        if self.node_id:
            result["node_id"] = self.node_id
        if self.edge_id:
            result["edge_id"] = self.edge_id
        if self.container_id:
            result["container_id"] = self.container_id
        return result


def has_cycle(graph: "Graph") -> bool:
    """True when the valid edges form a cycle, i.e. the layout is degraded."""
    _, complete = topological_order(graph.nodes, graph.edges)
    return not complete


def validate_graph(graph: "Graph") -> list[ValidationIssue]:
    """
    Validate a graph and return a list of issues.

    Checks for:
    - Empty graph - INFO
    - Duplicate node ids - ERROR
    - Edge endpoints that do not exist (edge is dropped) - WARNING
    - Self-referencing edges - WARNING
    - Duplicate edges (same source->target) - WARNING
    - Cycles (layout falls back to input order) - WARNING
    - Containers with missing or no resolvable children - WARNING
    - Decorations targeting unknown ids - INFO

    Args:
        graph: The graph to validate

    Returns:
        List of ValidationIssue objects
    """
    issues: list[ValidationIssue] = []

    nodes = graph.nodes
    edges = graph.edges

    if not nodes:
        issues.append(ValidationIssue(
            severity=IssueSeverity.INFO,
            message="Graph has no nodes"
        ))
        return issues

    node_ids = {n.id for n in nodes}
    edge_ids = {e.id for e in edges}

    # Duplicate node ids
    for node_id, count in Counter(n.id for n in nodes).items():
        if count > 1:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Node id used {count} times; only the first is used for edges",
                node_id=node_id
            ))

    # Dangling edge references
    for edge in edges:
        if edge.source not in node_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Edge references non-existent source node: {edge.source}",
                edge_id=edge.id
            ))
        if edge.target not in node_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Edge references non-existent target node: {edge.target}",
                edge_id=edge.id
            ))

    # Self-referencing edges
    for edge in edges:
        if edge.source == edge.target:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message="Self-referencing edge (node points to itself)",
                edge_id=edge.id,
                node_id=edge.source
            ))

    # Duplicate edges (same source->target)
    seen_pairs: set[tuple[str, str]] = set()
    for edge in edges:
        pair = (edge.source, edge.target)
        if pair in seen_pairs:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Duplicate edge from {edge.source} to {edge.target}",
                edge_id=edge.id
            ))
        else:
            seen_pairs.add(pair)

    # Cycles
    order, complete = topological_order(nodes, edges)
    if not complete:
        ordered = set(order)
        stuck = [nid for nid in dict.fromkeys(n.id for n in nodes) if nid not in ordered]
        issues.append(ValidationIssue(
            severity=IssueSeverity.WARNING,
            message=f"Graph has a cycle; layout is approximate for: {', '.join(stuck)}"
        ))

    # Containers
    for container in graph.containers:
        missing = [c for c in container.children if c not in node_ids]
        if len(missing) == len(container.children):
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message="Container has no resolvable children and will not be drawn",
                container_id=container.id
            ))
        elif missing:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Container references non-existent nodes: {', '.join(missing)}",
                container_id=container.id
            ))

    # Decoration targets
    for decoration in graph.decorations:
        if decoration.target and decoration.target not in node_ids | edge_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.INFO,
                message=f"Decoration target not found, using absolute position: {decoration.target}"
            ))

    return issues


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Create a summary of validation issues.

    Args:
        issues: List of validation issues

    Returns:
        Dictionary with counts by severity
    """
    return {
        "total": len(issues),
        "errors": len([i for i in issues if i.severity == IssueSeverity.ERROR]),
        "warnings": len([i for i in issues if i.severity == IssueSeverity.WARNING]),
        "info": len([i for i in issues if i.severity == IssueSeverity.INFO]),
        "valid": len([i for i in issues if i.severity == IssueSeverity.ERROR]) == 0
    }
