# src/seo_auditor/rules/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, Optional

from .core import BaseRule, RuleDefinition
from ..dom.models import HTMLDocument
from ..model import RawRule, RuleKind

logger = logging.getLogger(__name__)


class RuleRegistry:
    """
    Central registry mapping each RuleKind to its executable variant.

    Dynamically discovers the RuleDefinition modules in the
    'seo_auditor.rules.variants' package. The variant of a RawRule is chosen
    from its shape when the rule is created, never while it is evaluated.
    """

    _definitions: Dict[RuleKind, RuleDefinition] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Registers every `DEFINITION` (instance of RuleDefinition) found in the
        'seo_auditor.rules.variants' package. Runs once per process.
        """
        if cls._loaded:
            return

        try:
            import seo_auditor.rules.variants as variants_pkg

            for _, name, _ in pkgutil.iter_modules(variants_pkg.__path__):
                full_name = f"seo_auditor.rules.variants.{name}"
                try:
                    module = importlib.import_module(full_name)
                    if hasattr(module, "DEFINITION") and isinstance(module.DEFINITION, RuleDefinition):
                        defn = module.DEFINITION
                        cls._definitions[defn.kind] = defn
                        logger.debug(f"Rule variant loaded: {defn.kind.value} -> {defn.rule_class.__name__}")
                except Exception as e:
                    logger.error(f"Error loading rule variant {name}: {e}", exc_info=True)

            cls._loaded = True
        except ImportError as e:
            logger.error(f"Could not find rule variants package: {e}")

    @classmethod
    def get_definition(cls, kind: RuleKind) -> Optional[RuleDefinition]:
        cls.discover()
        return cls._definitions.get(kind)

    @classmethod
    def create_rule(cls, document: HTMLDocument, raw: RawRule) -> BaseRule:
        """
        Builds the variant matching the shape of `raw`, bound to `document`.

        A RawRule without a recognised shape yields a plain BaseRule, which
        fails when evaluated.
        """
        defn = cls.get_definition(raw.kind)
        if defn is None:
            if raw.kind != RuleKind.BASE:
                logger.warning("No variant registered for kind '%s'; using BaseRule.", raw.kind.value)
            return BaseRule(document, raw)
        return defn.create(document, raw)
