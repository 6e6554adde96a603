from __future__ import annotations

from typing import Callable, Iterable, Iterator, Sequence

from .color_models import Node


class NodeIndex:
    """
    Id-keyed arena over a flat node snapshot.

    Built once per batch so every ancestor hop is a dict lookup. A parent id
    that matches no node counts as "no parent". Ancestor walks stop on a
    repeated id, so cyclic input terminates.
    """

    def __init__(self, nodes: Iterable[Node]) -> None:
        self.nodes: list[Node] = list(nodes)
        self.by_id: dict[str, Node] = {node.id: node for node in self.nodes}
        self._children: dict[str, list[Node]] | None = None
        self._root_summaries: list[Node] | None = None

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.by_id

    def get(self, node_id: str | None) -> Node | None:
        if node_id is None:
            return None
        return self.by_id.get(node_id)

    def parent_of(self, node: Node) -> Node | None:
        return self.get(node.parent_id)

    def is_root(self, node: Node) -> bool:
        return self.parent_of(node) is None

    def children_of(self, node_id: str) -> list[Node]:
        """Direct children in snapshot order."""
        if self._children is None:
            children: dict[str, list[Node]] = {}
            for node in self.nodes:
                parent = self.parent_of(node)
                if parent is not None:
                    children.setdefault(parent.id, []).append(node)
            self._children = children
        return list(self._children.get(node_id, []))

    def root_summaries(self) -> list[Node]:
        """Summary nodes without a (resolvable) parent, in snapshot order."""
        if self._root_summaries is None:
            self._root_summaries = [
                node for node in self.nodes if node.kind == "summary" and self.is_root(node)
            ]
        return list(self._root_summaries)

    def ancestors(self, node: Node) -> Iterator[Node]:
        """Yield parent, grandparent, ... up to the root."""
        seen = {node.id}
        current = self.parent_of(node)
        while current is not None and current.id not in seen:
            yield current
            seen.add(current.id)
            current = self.parent_of(current)


NodesLike = Sequence[Node] | NodeIndex


def as_index(nodes: NodesLike) -> NodeIndex:
    return nodes if isinstance(nodes, NodeIndex) else NodeIndex(nodes)


def depth(node: Node, nodes: NodesLike) -> int:
    """Number of parent hops to the root; roots have depth 0."""
    return sum(1 for _ in as_index(nodes).ancestors(node))


def nearest_ancestor_matching(
    node: Node, nodes: NodesLike, predicate: Callable[[Node], bool]
) -> Node | None:
    """First ancestor (nearest first) satisfying predicate; the node itself is not considered."""
    for ancestor in as_index(nodes).ancestors(node):
        if predicate(ancestor):
            return ancestor
    return None


def nearest_summary(node: Node, nodes: NodesLike) -> Node | None:
    return nearest_ancestor_matching(node, nodes, lambda candidate: candidate.kind == "summary")


def root_ancestor(node: Node, nodes: NodesLike) -> Node:
    """Topmost ancestor; a node without a parent is its own root."""
    root = node
    for ancestor in as_index(nodes).ancestors(node):
        root = ancestor
    return root


def depth_relative_to(node: Node, ancestor: Node, nodes: NodesLike) -> int:
    """Hops from node up to ancestor (full depth if ancestor is not on the chain)."""
    if node.id == ancestor.id:
        return 0
    hops = 0
    for hops, current in enumerate(as_index(nodes).ancestors(node), start=1):
        if current.id == ancestor.id:
            break
    return hops


def root_summaries(nodes: NodesLike) -> list[Node]:
    return as_index(nodes).root_summaries()


def theme_color_giver(node: Node, nodes: NodesLike) -> Node | None:
    """
    Node whose palette slot colors this node's subtree in theme mode.

    With exactly one root summary, its direct children are promoted to
    color-givers so sibling groups under one umbrella project stay distinct;
    the single root itself has none. Otherwise the topmost ancestor is the
    color-giver, and a root has none (it colors its own subtree).
    """

    index = as_index(nodes)
    roots = root_summaries(index)

    if len(roots) == 1:
        single_root = roots[0]
        if node.id == single_root.id:
            return None
        lineage = [node, *index.ancestors(node)]
        for current, parent in zip(lineage, lineage[1:]):
            if parent.id == single_root.id:
                return current
        return None

    root = root_ancestor(node, index)
    if root.id == node.id:
        return None
    return root


def color_giver_ids(nodes: NodesLike) -> list[str]:
    """Ids that each claim one palette slot, in snapshot order."""
    index = as_index(nodes)
    roots = root_summaries(index)
    if len(roots) == 1:
        return [child.id for child in index.children_of(roots[0].id)]
    return [node.id for node in index.nodes if index.is_root(node)]
