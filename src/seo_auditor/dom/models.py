# src/seo_auditor/dom/models.py
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from .core import Node, ROOT_ID
from .tag_index import TagIndex


class HTMLTree:
    """
    Arena holding every node of one parsed document.

    A node's id is its position in the arena, so handles resolve in O(1).
    Node 0 is the synthetic root (empty name and content, no parent).
    """

    def __init__(self, nodes: Optional[List[Node]] = None):
        self._nodes: List[Node] = nodes if nodes is not None else [Node(id=ROOT_ID)]

    @property
    def root(self) -> Node:
        return self._nodes[ROOT_ID]

    def get(self, node_id: int) -> Node:
        return self._nodes[node_id]

    def parent(self, node: Node) -> Optional[Node]:
        """Returns the parent of `node`, or None for the root."""
        if node.is_root:
            return None
        return self._nodes[node.parent_id]

    def children(self, node: Node) -> List[Node]:
        return [self._nodes[child_id] for child_id in node.children]

    def __len__(self) -> int:
        return len(self._nodes)


class HTMLDocument(BaseModel):
    """
    Represents one loaded HTML source.

    Bundles the node tree with the TagIndex built in the same pass; both are
    discarded together when another source is loaded.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    tree: HTMLTree
    index: TagIndex
    source_length: int = 0

    def lookup(self, tag_name: str) -> List[Node]:
        return self.index.lookup(tag_name)

    def parent_name(self, node: Node) -> Optional[str]:
        """Returns the name of the node's parent (the root's name is '')."""
        parent = self.tree.parent(node)
        return parent.name if parent is not None else None
