# src/seo_auditor/dom/tag_index.py
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from .core import Node


class TagIndex:
    """
    Depth-agnostic lookup table from tag name to every node bearing that name.

    The index is produced by the DOMBuilder together with the tree it points
    into and is read-only afterwards. Loading a new source replaces both
    wholesale; the index is never patched on its own.
    """

    def __init__(self, buckets: Optional[Mapping[str, Sequence[Node]]] = None):
        # Buckets are copied into tuples so callers cannot mutate them.
        self._buckets: Dict[str, tuple] = {
            name: tuple(nodes) for name, nodes in (buckets or {}).items()
        }

    def lookup(self, tag_name: str) -> List[Node]:
        """
        Returns the nodes named `tag_name` in document order.

        Args:
            tag_name (str): The (lowercase) tag name to look up.

        Returns:
            List[Node]: The matching nodes, or an empty list.
        """
        return list(self._buckets.get(tag_name, ()))

    def count(self, tag_name: str) -> int:
        """Returns the number of nodes named `tag_name`."""
        return len(self._buckets.get(tag_name, ()))

    def total(self) -> int:
        return sum(len(nodes) for nodes in self._buckets.values())

    def __contains__(self, tag_name: object) -> bool:
        return tag_name in self._buckets

    def __iter__(self) -> Iterator[str]:
        return iter(self._buckets)

    def __len__(self) -> int:
        return len(self._buckets)

    def __repr__(self) -> str:
        return f"TagIndex(names={len(self._buckets)}, nodes={self.total()})"
