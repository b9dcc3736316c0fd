# src/seo_auditor/managers/rule_catalog_manager.py
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from ..exceptions import IndexOutOfRangeError
from ..model import PREDEFINED_RAW_RULES, RawRule, RuleKind

logger = logging.getLogger(__name__)


class RuleCatalog:
    """
    Append-only, index-addressable list of RawRules.

    Starts with the predefined rules. Indices are stable: rules are never
    removed or reordered, so an index keeps pointing at the same rule.
    """

    def __init__(self, rules: Optional[Iterable[RawRule]] = None):
        self._rules: List[RawRule] = list(PREDEFINED_RAW_RULES if rules is None else rules)

    def __len__(self) -> int:
        return len(self._rules)

    def contains(self, rule: RawRule) -> bool:
        """Field-wise equality scan against every existing rule."""
        for existing in self._rules:
            if existing == rule:
                return True
        return False

    def add(self, rule: RawRule) -> bool:
        """
        Appends `rule` unless a structurally identical rule already exists.

        Returns:
            bool: True if the rule was added (its index is len - 1).
        """
        if self.contains(rule):
            logger.info("Rule %s already in catalog; not added.", rule.to_dict())
            return False
        self._rules.append(rule)
        logger.debug("Rule %s added at index %d.", rule.to_dict(), len(self._rules) - 1)
        return True

    def add_from_dict(self, data: Dict[str, Any]) -> bool:
        """
        Adds a rule from its serializable form (e.g. from settings.json).
        Invalid or malformed entries are skipped and reported as False.
        """
        try:
            rule = RawRule(**data)
        except (ValidationError, TypeError) as e:
            logger.warning("Skipping invalid rule %s: %s", data, e)
            return False
        if rule.kind == RuleKind.BASE:
            logger.warning("Skipping rule %s: it has no check besides the tag.", data)
            return False
        return self.add(rule)

    def get(self, index: int) -> RawRule:
        if not isinstance(index, int) or isinstance(index, bool) or index < 0 or index >= len(self._rules):
            raise IndexOutOfRangeError(index, len(self._rules))
        return self._rules[index]

    def resolve(self, indices: Iterable[int]) -> List[RawRule]:
        """Resolves all indices, failing before anything is returned if one is invalid."""
        return [self.get(idx) for idx in indices]

    def list_rules(self) -> List[Tuple[int, str]]:
        """Returns (index, description) pairs for every rule in the catalog."""
        return [(idx, rule.describe()) for idx, rule in enumerate(self._rules)]

    def raw_rules(self) -> List[RawRule]:
        """Returns a copy of the catalog (RawRules are immutable)."""
        return list(self._rules)
