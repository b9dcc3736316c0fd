# src/seo_auditor/dom/builder.py
import logging
from typing import Dict, List

from .core import Node, ROOT_ID
from .models import HTMLDocument, HTMLTree
from .tag_index import TagIndex
from ..exceptions import InputError

logger = logging.getLogger(__name__)


def extract_tag_name(tag_content: str) -> str:
    """
    Extracts the tag name from raw tag text.

    The incoming text can look like '<head>', '</head>', '<title />' or
    '<meta name="x">'. A trailing '/' of a self-closing tag is not part of
    the name, so '<br/>' yields 'br'.
    """
    if tag_content.startswith('</'):
        end = tag_content.find('>')
        name = tag_content[2:end] if end != -1 else tag_content[2:]
        return name.strip().rstrip('/')

    stripped = tag_content[:-1] if tag_content.endswith('>') else tag_content
    tokens = stripped[1:].split()
    if not tokens:
        return ""
    return tokens[0].rstrip('/')


class DOMBuilder:
    """
    Builder responsible for turning raw HTML into an HTMLDocument.

    The source is scanned once, left to right. Every tag becomes a Node;
    text between tags is skipped. The TagIndex is filled in the same pass.
    The builder is lenient by design: unmatched closing tags are ignored and
    an unterminated tag simply runs to the end of the input.
    """

    def parse_doc(self, html: str) -> HTMLDocument:
        """
        Parses raw HTML content into a tree plus tag index.

        Args:
            html (str): The raw HTML string.

        Returns:
            HTMLDocument: The node tree and its TagIndex.

        Raises:
            InputError: If `html` is None.
        """
        if html is None:
            logger.error("Refusing to parse: HTML source is None.")
            raise InputError("HTML source should not be None.")

        # Ids are handed out per build; the arena position equals the id.
        nodes: List[Node] = [Node(id=ROOT_ID)]
        buckets: Dict[str, List[Node]] = {}
        pointer = nodes[ROOT_ID]

        length = len(html)
        i = html.find('<')
        while i != -1:
            j = html.find('>', i + 1)
            if j == -1:
                # Unterminated tag: it spans the rest of the input.
                j = length - 1

            tag_content = html[i:j + 1].lower()
            name = extract_tag_name(tag_content)

            if tag_content.endswith('/>'):
                # Leaf element
                self._add_node(nodes, buckets, pointer, name, tag_content)
            elif not tag_content.startswith('</'):
                # Opening tag: descend into it
                pointer = self._add_node(nodes, buckets, pointer, name, tag_content)
            else:
                # Closing tag. Never climb to (or past) the synthetic root.
                if pointer.parent_id is not None and nodes[pointer.parent_id].parent_id is not None:
                    pointer = nodes[pointer.parent_id]

            i = html.find('<', j + 1)

        logger.debug(
            "Parsed %d tags (%d distinct names) from %d characters.",
            len(nodes) - 1, len(buckets), length
        )
        return HTMLDocument(
            tree=HTMLTree(nodes),
            index=TagIndex(buckets),
            source_length=length
        )

    @staticmethod
    def _add_node(
            nodes: List[Node],
            buckets: Dict[str, List[Node]],
            parent: Node,
            name: str,
            content: str
    ) -> Node:
        node = Node(id=len(nodes), name=name, content=content, parent_id=parent.id)
        nodes.append(node)
        parent.children.append(node.id)
        buckets.setdefault(name, []).append(node)
        return node
