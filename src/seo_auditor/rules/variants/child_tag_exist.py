from ..core import BaseRule, RuleDefinition
from ...model import RuleKind


class ChildTagExistRule(BaseRule):
    """Counts the <childtag> elements whose direct parent is a <tag>."""

    def __init__(self, document, raw):
        super().__init__(document, raw)
        self.child_tag = raw.childtag

    def evaluate(self) -> str:
        for m in self.find_all_matches(self.child_tag):
            if self.document.parent_name(m) == self.main_tag:
                self.num_of_exists += 1
        return f"In <{self.main_tag}>, there are {self.num_of_exists} child tag <{self.child_tag}>."


DEFINITION = RuleDefinition(
    kind=RuleKind.CHILDTAG_EXIST,
    rule_class=ChildTagExistRule,
    required_fields=["childtag"]
)
