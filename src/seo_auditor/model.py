from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RuleKind(str, Enum):
    """The executable variant a RawRule maps to, derived from its shape."""
    BASE = "base"
    ATTR_EXIST = "attr_exist"
    CHILDTAG_EXIST = "childtag_exist"
    CHILDTAG_ATTR_VAL = "childtag_attr_val"
    TAG_COUNT = "tag_count"


class RawRule(BaseModel):
    """
    Declarative description of one SEO check.

    The shape (which optional fields are set) selects the variant:
    {tag, attr}, {tag, childtag}, {tag, childtag, childattr, childval} or
    {tag, count}. A bare {tag} is a malformed rule. Two RawRules are
    duplicates when all their fields are equal.
    """
    model_config = ConfigDict(frozen=True)

    tag: str
    attr: Optional[str] = None
    childtag: Optional[str] = None
    childattr: Optional[str] = None
    childval: Optional[str] = None
    count: Optional[int] = Field(default=None, ge=0)

    @field_validator('tag', 'attr', 'childtag', 'childattr', 'childval')
    @classmethod
    def lowercase(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v is not None else v

    @property
    def kind(self) -> RuleKind:
        """Resolves the variant kind. Child-tag shapes take precedence over count and attr."""
        if self.childtag is not None:
            if self.childattr is not None:
                return RuleKind.CHILDTAG_ATTR_VAL
            return RuleKind.CHILDTAG_EXIST
        if self.count is not None:
            return RuleKind.TAG_COUNT
        if self.attr is not None:
            return RuleKind.ATTR_EXIST
        return RuleKind.BASE

    def describe(self) -> str:
        """Translates the rule into a human readable message."""
        kind = self.kind
        if kind == RuleKind.CHILDTAG_ATTR_VAL:
            return f"In <{self.tag}>, check if <{self.childtag}> has '{self.childattr}={self.childval}'."
        if kind == RuleKind.CHILDTAG_EXIST:
            return f"In <{self.tag}>, check if there is '<{self.childtag}>'."
        if kind == RuleKind.ATTR_EXIST:
            return f"Check if <{self.tag}> has attribute '{self.attr}'."
        if kind == RuleKind.TAG_COUNT:
            return f"Check if there is more than {self.count} <{self.tag}> tag in this HTML."
        return ""

    def to_dict(self) -> Dict[str, Any]:
        """Returns the serializable form, with only the fields of its shape."""
        return self.model_dump(exclude_none=True)


PREDEFINED_RAW_RULES: List[RawRule] = [
    RawRule(tag='img', attr='alt'),
    RawRule(tag='a', attr='rel'),
    RawRule(tag='head', childtag='title'),
    RawRule(tag='head', childtag='meta', childattr='name', childval='descriptions'),
    RawRule(tag='head', childtag='meta', childattr='name', childval='keywords'),
    RawRule(tag='strong', count=15),
    RawRule(tag='h1', count=1),
]

DEFAULT_RULE_INDICES: List[int] = list(range(len(PREDEFINED_RAW_RULES)))
