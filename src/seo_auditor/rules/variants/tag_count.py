from ..core import BaseRule, RuleDefinition
from ...model import RuleKind


class TagCountRule(BaseRule):
    """Compares the number of <tag> elements against a threshold."""

    def __init__(self, document, raw):
        super().__init__(document, raw)
        self.criteria = raw.count

    def evaluate(self) -> str:
        self.num_of_exists = self.document.index.count(self.main_tag)
        less_or_more = 'more than or equal to' if self.num_of_exists >= self.criteria else 'less than'
        return (
            f"In this HTML, there are {self.num_of_exists} "
            f"({less_or_more} {self.criteria}) <{self.main_tag}>."
        )


DEFINITION = RuleDefinition(
    kind=RuleKind.TAG_COUNT,
    rule_class=TagCountRule,
    required_fields=["count"]
)
