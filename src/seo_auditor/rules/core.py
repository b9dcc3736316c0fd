from typing import List, Type

from ..dom.core import Node
from ..dom.models import HTMLDocument
from ..model import RawRule, RuleKind


class BaseRule:
    """
    Base class for an executable SEO rule.

    An instance lives for one evaluation call: it is bound to the currently
    loaded document and keeps a running counter of matched nodes. On its own
    it represents a malformed RawRule (only a tag, no check) and refuses to
    evaluate; the variants in `seo_auditor.rules.variants` implement the
    actual checks.
    """

    def __init__(self, document: HTMLDocument, raw: RawRule):
        if not raw.tag:
            raise ValueError("Target tag should be contained in parameters.")
        self.document = document
        self.raw = raw
        self.main_tag = raw.tag
        self.num_of_exists = 0

    def find_all_matches(self, tag: str) -> List[Node]:
        return self.document.lookup(tag)

    def evaluate(self) -> str:
        raise NotImplementedError(
            f"Rule {self.raw.to_dict()} has no check to evaluate; it must be implemented by a variant."
        )


class RuleDefinition:
    """
    Configuration object binding a RuleKind to the class that evaluates it.
    Each variant module exposes one as `DEFINITION` for the RuleRegistry.
    """

    def __init__(self, kind: RuleKind, rule_class: Type[BaseRule], required_fields: List[str]):
        self.kind = kind
        self.rule_class = rule_class
        self.required_fields = required_fields

    def create(self, document: HTMLDocument, raw: RawRule) -> BaseRule:
        missing = [f for f in self.required_fields if getattr(raw, f) is None]
        if missing:
            raise ValueError(f"{self.rule_class.__name__} requires fields: {', '.join(missing)}")
        return self.rule_class(document, raw)
