"""
Feature dependency graph.

Builds a node graph from features and answers the questions planning
needs: is the graph acyclic, are all dependencies present, how deep is
it, what is the longest chain, and which features are ready to build.

Every traversal uses an explicit stack with a three-state marker
(unvisited / in progress / done), so arbitrarily deep or cyclic inputs
neither recurse nor loop forever.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Iterator
from enum import Enum

from phaseguard.domain.exceptions import PlanningError
from phaseguard.domain.models import (
    Complexity,
    DependencyAnalysis,
    DependencyNode,
    Feature,
)

logger = logging.getLogger("phaseguard.graph")


class _Mark(Enum):
    """Traversal state. Absence from the marks dict means unvisited."""

    IN_PROGRESS = "in_progress"
    DONE = "done"


_DOT_COLORS = {
    Complexity.HIGH: "red",
    Complexity.MEDIUM: "orange",
    Complexity.LOW: "green",
}


class DependencyGraph:
    """
    Dependency graph over one feature set.

    Owned by a single run. build_graph() replaces the whole graph; there is
    no incremental update. All queries require build_graph() first.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, DependencyNode] = {}
        self._built = False

    def build_graph(self, features: Iterable[Feature]) -> None:
        """
        Build nodes and edges, then compute node depths.

        Dependency ids absent from the feature set get no edge.

        Raises:
            PlanningError: If two features share an id
        """
        nodes: dict[str, DependencyNode] = {}
        for feature in features:
            if feature.id in nodes:
                raise PlanningError(f"Duplicate feature id: {feature.id}")
            nodes[feature.id] = DependencyNode(feature=feature)

        for node in nodes.values():
            for dep_id in dict.fromkeys(node.feature.dependencies):
                dep_node = nodes.get(dep_id)
                if dep_node is not None:
                    node.dependencies.append(dep_node)
                    dep_node.dependents.append(node)

        self._nodes = nodes
        self._built = True
        self._calculate_depths()
        logger.debug("Built dependency graph with %d features", len(nodes))

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._nodes

    def __iter__(self) -> Iterator[DependencyNode]:
        return iter(self._nodes.values())

    def get_node(self, feature_id: str) -> DependencyNode:
        """
        Raises:
            KeyError: If the feature is not in the graph
        """
        self._require_built()
        if feature_id not in self._nodes:
            raise KeyError(f"Feature not found: {feature_id}")
        return self._nodes[feature_id]

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def analyze_dependencies(self) -> DependencyAnalysis:
        """Check for cycles, missing dependencies and orphaned features."""
        self._require_built()
        errors: list[str] = []
        warnings: list[str] = []

        cycle = self.detect_cycle()
        if cycle:
            errors.append(f"Circular dependencies detected: {' -> '.join(cycle)}")

        for node in self._nodes.values():
            for dep_id in node.feature.dependencies:
                if dep_id not in self._nodes:
                    errors.append(
                        f'Feature "{node.feature.name}" depends on missing '
                        f'feature "{dep_id}"'
                    )

        for node in self._nodes.values():
            if (
                node.feature.complexity == Complexity.HIGH
                and not node.dependencies
                and not node.dependents
            ):
                warnings.append(
                    f'High-complexity feature "{node.feature.name}" has no '
                    "dependencies or dependents"
                )

        for message in errors:
            logger.warning("Dependency error: %s", message)

        return DependencyAnalysis(
            is_valid=not errors,
            errors=tuple(errors),
            warnings=tuple(warnings),
            critical_path=self._find_critical_path(),
            max_depth=max((n.depth for n in self._nodes.values()), default=0),
            cycle=cycle,
        )

    def detect_cycle(self) -> tuple[str, ...]:
        """
        Find the first dependency cycle in insertion order.

        Returns:
            Feature ids along the cycle with the first id repeated at the
            end (e.g. ("a", "b", "a")), or () if the graph is acyclic
        """
        self._require_built()
        marks: dict[str, _Mark] = {}

        for root in self._nodes.values():
            if root.feature_id in marks:
                continue
            marks[root.feature_id] = _Mark.IN_PROGRESS
            stack = [(root, iter(root.dependencies))]

            while stack:
                node, pending = stack[-1]
                for dep in pending:
                    mark = marks.get(dep.feature_id)
                    if mark is _Mark.IN_PROGRESS:
                        # The stack is exactly the current path
                        path = [n.feature_id for n, _ in stack]
                        start = path.index(dep.feature_id)
                        return (*path[start:], dep.feature_id)
                    if mark is None:
                        marks[dep.feature_id] = _Mark.IN_PROGRESS
                        stack.append((dep, iter(dep.dependencies)))
                        break
                else:
                    stack.pop()
                    marks[node.feature_id] = _Mark.DONE

        return ()

    def missing_dependencies(self) -> dict[str, tuple[str, ...]]:
        """Map feature id -> declared dependency ids absent from the graph."""
        self._require_built()
        missing: dict[str, tuple[str, ...]] = {}
        for node in self._nodes.values():
            absent = tuple(d for d in node.feature.dependencies if d not in self._nodes)
            if absent:
                missing[node.feature_id] = absent
        return missing

    # -------------------------------------------------------------------------
    # Readiness
    # -------------------------------------------------------------------------

    def get_ready_features(self, completed_ids: Collection[str]) -> list[Feature]:
        """
        Features that are not completed and whose resolved dependencies are.

        Returns:
            Ready features, ascending by priority, stable on ties
        """
        self._require_built()
        ready = [
            node.feature
            for node in self._nodes.values()
            if node.feature_id not in completed_ids
            and all(dep.feature_id in completed_ids for dep in node.dependencies)
        ]
        return sorted(ready, key=lambda f: f.priority)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export_dot(self) -> str:
        """Render the graph as Graphviz DOT, edges pointing at dependencies."""
        self._require_built()
        lines = [
            "digraph FeatureDependencies {",
            "  rankdir=TB;",
            "  node [shape=box, style=rounded];",
            "",
        ]
        for node in self._nodes.values():
            feature = node.feature
            label = feature.name.replace('"', '\\"')
            lines.append(
                f'  "{feature.id}" [label="{label}\\n'
                f'({feature.estimated_work_units} units)", '
                f"color={_DOT_COLORS[feature.complexity]}];"
            )
            for dep in node.dependencies:
                lines.append(f'  "{feature.id}" -> "{dep.feature_id}";')
        lines.append("}")
        return "\n".join(lines)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_built(self) -> None:
        if not self._built:
            raise RuntimeError("build_graph() must be called before querying")

    def _post_order(self) -> list[DependencyNode]:
        """Every node, dependencies first. Edges closing a cycle are skipped."""
        marks: dict[str, _Mark] = {}
        order: list[DependencyNode] = []

        for root in self._nodes.values():
            if root.feature_id in marks:
                continue
            marks[root.feature_id] = _Mark.IN_PROGRESS
            stack = [(root, iter(root.dependencies))]

            while stack:
                node, pending = stack[-1]
                for dep in pending:
                    if dep.feature_id not in marks:
                        marks[dep.feature_id] = _Mark.IN_PROGRESS
                        stack.append((dep, iter(dep.dependencies)))
                        break
                else:
                    stack.pop()
                    marks[node.feature_id] = _Mark.DONE
                    order.append(node)

        return order

    def _calculate_depths(self) -> None:
        """depth = 1 + max(depth of dependencies), 0 without dependencies."""
        depths: dict[str, int] = {}
        for node in self._post_order():
            known = [
                depths[dep.feature_id]
                for dep in node.dependencies
                if dep.feature_id in depths
            ]
            node.depth = 1 + max(known) if known else 0
            depths[node.feature_id] = node.depth

    def _find_critical_path(self) -> tuple[Feature, ...]:
        """
        Longest chain by node count from a node without dependents.

        Ties go to the first chain discovered (insertion order of roots,
        declared order of dependencies). Returned dependency-first.
        """
        lengths: dict[str, int] = {}
        next_hop: dict[str, DependencyNode | None] = {}

        for node in self._post_order():
            best: DependencyNode | None = None
            best_length = 0
            for dep in node.dependencies:
                dep_length = lengths.get(dep.feature_id, 0)
                if dep_length > best_length:
                    best, best_length = dep, dep_length
            lengths[node.feature_id] = best_length + 1
            next_hop[node.feature_id] = best

        start: DependencyNode | None = None
        start_length = 0
        for node in self._nodes.values():
            if not node.dependents and lengths[node.feature_id] > start_length:
                start, start_length = node, lengths[node.feature_id]

        path: list[Feature] = []
        while start is not None:
            path.append(start.feature)
            start = next_hop[start.feature_id]
        path.reverse()
        return tuple(path)
