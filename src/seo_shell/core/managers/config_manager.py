# src/seo_shell/core/managers/config_manager.py
import codecs
import copy
import json
import logging
from typing import Any, Dict, List, Optional

from seo_auditor.model import DEFAULT_RULE_INDICES
from seo_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


def _parse_scalar(raw: str) -> Any:
    """'5' -> 5, 'true' -> True, '"x"' -> 'x'; anything else stays a string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


class ConfigManager:
    """
    A singleton class to manage the audit configuration.

    Settings are loaded from the packaged settings.json and can be overridden
    in memory for the current run (see `set_nested`). Overrides never touch
    the file on disk; `reset` throws them away.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns a copy of the effective configuration."""
        return copy.deepcopy(self._config)

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value, e.g. 'audit.default_rules'.
        """
        value = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(key)
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Overrides a nested value in memory.

        String values are converted to the type of the value they replace:
        'true'/'false' for booleans, numbers for ints and floats, and either
        JSON ('[0, 2]') or a comma separated list ('0,2') for lists. New keys
        take whatever JSON the string spells, falling back to the string.

        Returns:
            bool: False when the path is blocked or the value does not convert.
        """
        keys = key_path.split('.')
        if not all(keys):
            logger.error("Invalid config key '%s'.", key_path)
            return False

        d = self._config
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, key)
                return False

        if isinstance(value, str):
            try:
                value = self._convert(value, d.get(keys[-1]))
            except (ValueError, TypeError) as e:
                logger.error("Cannot set '%s' to %r: %s", key_path, value, e)
                return False

        d[keys[-1]] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    @staticmethod
    def _convert(raw: str, current: Any) -> Any:
        if current is None:
            return _parse_scalar(raw)
        if isinstance(current, bool):
            word = raw.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
            raise ValueError(f"expected a boolean, got '{raw}'")
        if isinstance(current, (int, float)):
            return type(current)(raw)
        if isinstance(current, list):
            if raw.strip().startswith("["):
                value = json.loads(raw)
                if not isinstance(value, list):
                    raise ValueError("expected a JSON list")
                return value
            return [_parse_scalar(part.strip()) for part in raw.split(",") if part.strip()]
        if isinstance(current, dict):
            value = json.loads(raw)
            if not isinstance(value, dict):
                raise ValueError("expected a JSON object")
            return value
        return raw

    def apply_overrides(self, pairs: List[str]) -> List[str]:
        """
        Applies 'KEY=VALUE' overrides in order.

        Returns:
            List[str]: The pairs that could not be applied.
        """
        rejected = []
        for pair in pairs:
            key, sep, raw = pair.partition("=")
            if not sep or not self.set_nested(key.strip(), raw.strip()):
                rejected.append(pair)
        return rejected

    # --- Typed accessors for the audit settings ---

    def get_rule_indices(self) -> List[int]:
        """
        Returns 'audit.default_rules'.

        Raises:
            ValueError: If the setting is not a list of integers.
        """
        indices = self.get_nested("audit.default_rules", list(DEFAULT_RULE_INDICES))
        if not isinstance(indices, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in indices
        ):
            raise ValueError(f"audit.default_rules must be a list of rule indices, got {indices!r}.")
        return list(indices)

    def get_extra_rules(self) -> List[Dict[str, Any]]:
        """Returns the rule dicts in 'audit.extra_rules'; entries that are not objects are dropped."""
        rules = self.get_nested("audit.extra_rules", [])
        if not isinstance(rules, list):
            logger.warning("audit.extra_rules is not a list; ignoring it.")
            return []
        kept = [rule for rule in rules if isinstance(rule, dict)]
        if len(kept) != len(rules):
            logger.warning("Ignoring %d extra rule(s) that are not objects.", len(rules) - len(kept))
        return kept

    def get_encoding(self) -> str:
        """
        Returns 'io.encoding'.

        Raises:
            ValueError: If Python knows no codec by that name.
        """
        encoding = self.get_nested("io.encoding", "utf-8")
        try:
            codecs.lookup(encoding)
        except (LookupError, TypeError):
            raise ValueError(f"Unknown io.encoding: {encoding!r}.") from None
        return encoding

    def reset(self):
        """Reloads the configuration from settings.json, dropping every override."""
        try:
            config_path = PathUtils.get_settings_file()
            if not config_path.exists():
                logger.warning("settings.json not found at %s. Using empty config.", config_path)
                self._config = {}
                return
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.info("Configuration has been (re)loaded from settings.json.")
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
