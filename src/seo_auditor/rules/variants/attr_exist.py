from ..core import BaseRule, RuleDefinition
from ...model import RuleKind


class AttrExistRule(BaseRule):
    """Counts the <tag> elements whose raw tag text contains the attribute name."""

    def __init__(self, document, raw):
        super().__init__(document, raw)
        self.main_attr = raw.attr

    def evaluate(self) -> str:
        matched_tags = self.find_all_matches(self.main_tag)
        for m in matched_tags:
            # Plain substring containment on the tag text, not attribute parsing.
            if self.main_attr in m.content:
                self.num_of_exists += 1
        return (
            f"Total number of <{self.main_tag}> tag : {len(matched_tags)} "
            f"==> {self.num_of_exists} of them with attribute : {self.main_attr}."
        )


DEFINITION = RuleDefinition(
    kind=RuleKind.ATTR_EXIST,
    rule_class=AttrExistRule,
    required_fields=["attr"]
)
