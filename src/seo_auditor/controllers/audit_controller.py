# src/seo_auditor/controllers/audit_controller.py
import logging
from pathlib import Path
from typing import IO, Any, List, Optional, Sequence, Tuple, Union

from ..dom.builder import DOMBuilder
from ..dom.core import Node
from ..dom.models import HTMLDocument
from ..exceptions import NotReadyError
from ..managers.rule_catalog_manager import RuleCatalog
from ..model import DEFAULT_RULE_INDICES, RawRule
from ..rules.registry import RuleRegistry
from ..services.source_service import read_source_file, read_source_stream

logger = logging.getLogger(__name__)


def _is_text(v: Any) -> bool:
    return isinstance(v, str) and v != ''


def _is_count(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


class SEOAuditor:
    """
    Evaluates a catalog of SEO rules against one loaded HTML source.

    Workflow: load a source (which builds the tree and tag index), optionally
    add rules, then evaluate a selection of catalog indices. Each instance
    owns its own document, catalog and results; separate sources that must
    be evaluated independently need separate instances.
    """

    def __init__(self, catalog: Optional[RuleCatalog] = None):
        RuleRegistry.discover()
        self.builder = DOMBuilder()
        self.catalog = catalog if catalog is not None else RuleCatalog()
        self._document: Optional[HTMLDocument] = None
        self._results: List[str] = []

    # --- Source loading ---

    def load_source(self, text: str) -> HTMLDocument:
        """
        Parses `text` and replaces the current document wholesale.

        Raises:
            InputError: If `text` is None. The previous document stays in place.
        """
        document = self.builder.parse_doc(text)
        self._results.clear()
        self._document = document
        logger.info(
            "Loaded HTML source: %d characters, %d tags.",
            document.source_length, document.index.total()
        )
        return document

    def load_file(self, path: Union[str, Path], encoding: str = "utf-8") -> HTMLDocument:
        return self.load_source(read_source_file(path, encoding=encoding))

    def load_stream(self, stream: IO, encoding: str = "utf-8") -> HTMLDocument:
        return self.load_source(read_source_stream(stream, encoding=encoding))

    @property
    def is_ready(self) -> bool:
        return self._document is not None

    @property
    def document(self) -> HTMLDocument:
        self._require_ready()
        return self._document

    def lookup(self, tag_name: str) -> List[Node]:
        """Returns all nodes named `tag_name` in document order."""
        self._require_ready()
        return self._document.lookup(tag_name)

    # --- Catalog operations ---

    def add_rule_attr(self, tag: str, attr: str) -> bool:
        """Adds a rule checking that <tag> elements carry attribute `attr`."""
        if not (_is_text(tag) and _is_text(attr)):
            return False
        return self.catalog.add(RawRule(tag=tag, attr=attr))

    def add_rule_child_tag(self, tag: str, child_tag: str) -> bool:
        """Adds a rule checking that <tag> has <child_tag> children."""
        if not (_is_text(tag) and _is_text(child_tag)):
            return False
        return self.catalog.add(RawRule(tag=tag, childtag=child_tag))

    def add_rule_child_tag_attr_val(self, tag: str, child_tag: str, child_attr: str, child_val: str) -> bool:
        """Adds a rule checking that <tag> has <child_tag child_attr="child_val"> children."""
        if not all(_is_text(v) for v in (tag, child_tag, child_attr, child_val)):
            return False
        return self.catalog.add(
            RawRule(tag=tag, childtag=child_tag, childattr=child_attr, childval=child_val)
        )

    def add_rule_tag_count(self, tag: str, count: int) -> bool:
        """Adds a rule comparing the number of <tag> elements against `count`."""
        if not (_is_text(tag) and _is_count(count)):
            return False
        return self.catalog.add(RawRule(tag=tag, count=count))

    def list_rules(self) -> List[Tuple[int, str]]:
        rules = self.catalog.list_rules()
        for idx, msg in rules:
            logger.debug("Rule Index : %d => %s", idx, msg)
        return rules

    def raw_rules(self) -> List[RawRule]:
        """Returns a copy of the current catalog. Meant for validation."""
        return self.catalog.raw_rules()

    # --- Evaluation ---

    def evaluate(self, rule_indices: Optional[Sequence[int]] = None) -> List[str]:
        """
        Evaluates the selected rules against the loaded document.

        Args:
            rule_indices: Catalog indices in the order the results should
                appear. Defaults to the predefined rules.

        Returns:
            List[str]: One diagnostic per requested index.

        Raises:
            NotReadyError: If no source has been loaded yet.
            IndexOutOfRangeError: If an index does not exist. The catalog and
                the previous results are left untouched.
        """
        self._require_ready()
        indices = list(DEFAULT_RULE_INDICES if rule_indices is None else rule_indices)

        # Resolve everything first so a bad index cannot leave half a result set.
        selected = self.catalog.resolve(indices)
        logger.info("Selected SEORule indices : %s", ",".join(str(i) for i in indices))

        rules = [RuleRegistry.create_rule(self._document, raw) for raw in selected]

        logger.debug("Evaluating %d rule(s) ...", len(rules))
        results = [rule.evaluate() for rule in rules]
        self._results = results
        return list(results)

    @property
    def results(self) -> List[str]:
        return list(self._results)

    def _require_ready(self) -> None:
        if self._document is None:
            logger.error("No HTML source loaded; call load_source() first.")
            raise NotReadyError("No HTML source has been loaded.")
