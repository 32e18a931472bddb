"""
Dependency graph over detected functions and its topological ordering.

The graph is built from extraction order alone: each function must precede
the next one. This stands in for real dependency inference (which function
calls which) until that is implemented; the sorter itself handles arbitrary
graphs and reports cycles instead of raising.
"""

import heapq
from collections import defaultdict

from pydantic import BaseModel

from flatport.errors import CycleDetected
from flatport.models import CodeElement


class DependencyGraph:
    """Directed graph where an edge (a, b) means a must appear before b."""

    def __init__(self):
        self._index: dict[str, int] = {}
        self._successors: dict[str, list[str]] = defaultdict(list)
        self._predecessors: dict[str, list[str]] = defaultdict(list)
        self.edges: set[tuple[str, str]] = set()

    @property
    def nodes(self) -> list[str]:
        """Node identities in insertion order."""
        return list(self._index)

    def __contains__(self, node: str) -> bool:
        return node in self._index

    def __len__(self) -> int:
        return len(self._index)

    def position(self, node: str) -> int:
        """Insertion position of a node, used to break ordering ties."""
        return self._index[node]

    def add_node(self, node: str) -> None:
        if node in self._index:
            raise ValueError(f"Duplicate node: {node}")
        self._index[node] = len(self._index)

    def add_edge(self, before: str, after: str) -> None:
        for node in (before, after):
            if node not in self._index:
                raise ValueError(f"Unknown node: {node}")
        if before == after:
            raise ValueError(f"Self-loop on {before}")
        if (before, after) in self.edges:
            return
        self.edges.add((before, after))
        self._successors[before].append(after)
        self._predecessors[after].append(before)

    def has_edge(self, before: str, after: str) -> bool:
        return (before, after) in self.edges

    def successors(self, node: str) -> list[str]:
        return list(self._successors.get(node, []))

    def predecessors(self, node: str) -> list[str]:
        return list(self._predecessors.get(node, []))


def build_dependency_graph(elements: list[CodeElement]) -> DependencyGraph:
    """Chain elements in extraction order: element i must precede element i+1.

    No other edges are added. This is a placeholder for call-graph based
    dependencies.
    """
    graph = DependencyGraph()
    for element in elements:
        graph.add_node(element.identity)

    for earlier, later in zip(elements, elements[1:]):
        graph.add_edge(earlier.identity, later.identity)

    return graph


def find_cycles(graph: DependencyGraph) -> list[list[str]]:
    """Use Tarjan's algorithm to find strongly connected components with a cycle.

    Iterative, so long chains do not hit the recursion limit. Each component is
    sorted by insertion order, and components are sorted by their first node.
    """
    index_counter = 0
    stack: list[str] = []
    on_stack: set[str] = set()
    index: dict[str, int] = {}
    lowlinks: dict[str, int] = {}
    result: list[list[str]] = []

    for root in graph.nodes:
        if root in index:
            continue

        index[root] = lowlinks[root] = index_counter
        index_counter += 1
        stack.append(root)
        on_stack.add(root)
        work = [(root, iter(graph.successors(root)))]

        while work:
            node, successors = work[-1]
            dep = next(successors, None)
            if dep is not None:
                if dep not in index:
                    index[dep] = lowlinks[dep] = index_counter
                    index_counter += 1
                    stack.append(dep)
                    on_stack.add(dep)
                    work.append((dep, iter(graph.successors(dep))))
                elif dep in on_stack:
                    lowlinks[node] = min(lowlinks[node], index[dep])
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlinks[parent] = min(lowlinks[parent], lowlinks[node])

            # If node is a root node, pop the stack and create an SCC
            if lowlinks[node] == index[node]:
                component = []
                while True:
                    w = stack.pop()
                    on_stack.discard(w)
                    component.append(w)
                    if w == node:
                        break
                if len(component) > 1:
                    result.append(sorted(component, key=graph.position))

    return sorted(result, key=lambda component: graph.position(component[0]))


class TopologicalOrder(BaseModel):
    """Successful sort: every node, each edge respected."""

    order: list[str]

    def unwrap(self) -> list[str]:
        return self.order


class CycleReport(BaseModel):
    """Failed sort: the nodes that could not be scheduled and the cycles among them."""

    nodes: list[str]
    cycles: list[list[str]]

    def unwrap(self) -> list[str]:
        raise CycleDetected(self.nodes)


SortResult = TopologicalOrder | CycleReport


def topological_sort(graph: DependencyGraph) -> SortResult:
    """Order nodes so every edge (a, b) has a before b.

    Kahn's algorithm; among nodes that are ready at the same time the one
    inserted first wins, so the result is deterministic. Returns a CycleReport
    instead of a partial order when the graph is not acyclic.
    """
    in_degree = {node: len(graph.predecessors(node)) for node in graph.nodes}

    ready = [(graph.position(node), node) for node, degree in in_degree.items() if degree == 0]
    heapq.heapify(ready)

    order: list[str] = []
    while ready:
        _, current = heapq.heappop(ready)
        order.append(current)

        for neighbor in graph.successors(current):
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                heapq.heappush(ready, (graph.position(neighbor), neighbor))

    if len(order) == len(graph):
        return TopologicalOrder(order=order)

    scheduled = set(order)
    remaining = [node for node in graph.nodes if node not in scheduled]
    return CycleReport(nodes=remaining, cycles=find_cycles(graph))
