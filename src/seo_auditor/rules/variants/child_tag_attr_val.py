from ..core import BaseRule, RuleDefinition
from ...model import RuleKind


class ChildTagAttrValRule(BaseRule):
    """
    Counts the <childtag> elements directly under a <tag> that carry
    childattr="childval" (single or double quoted).
    """

    def __init__(self, document, raw):
        super().__init__(document, raw)
        self.child_tag = raw.childtag
        self.child_tag_attr = raw.childattr
        self.child_tag_val = raw.childval
        self.target_double = f'{self.child_tag_attr}="{self.child_tag_val}"'
        self.target_single = f"{self.child_tag_attr}='{self.child_tag_val}'"

    def evaluate(self) -> str:
        for m in self.find_all_matches(self.child_tag):
            if self.document.parent_name(m) != self.main_tag:
                continue
            if self.target_double in m.content or self.target_single in m.content:
                self.num_of_exists += 1
        return (
            f"In <{self.main_tag}>, there are {self.num_of_exists} child tag <{self.child_tag}> "
            f"with attribute-value : {self.target_double}."
        )


DEFINITION = RuleDefinition(
    kind=RuleKind.CHILDTAG_ATTR_VAL,
    rule_class=ChildTagAttrValRule,
    required_fields=["childtag", "childattr", "childval"]
)
