# src/seo_shell/core/handlers/config_handler.py
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from seo_auditor.exceptions import IndexOutOfRangeError
from seo_auditor.managers.rule_catalog_manager import RuleCatalog
from seo_shell.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)

COMMAND_HIERARCHY: Dict[str, Optional[Dict[str, Any]]] = {
    "list": None,
    "get": None,
    "check": None,
}

USAGE = """
Usage:
  config list [--set KEY=VALUE ...]       Show the effective configuration as JSON.
  config get <key> [--set KEY=VALUE ...]  Show a single value (e.g. audit.default_rules).
  config check [--set KEY=VALUE ...]      Validate the audit settings.

--set overrides a value for this run only; settings.json is never written.
"""


def split_overrides(args: List[str]) -> Tuple[List[str], List[str]]:
    """Separates '--set KEY=VALUE' pairs from the remaining arguments."""
    rest, pairs = [], []
    it = iter(args)
    for arg in it:
        if arg == "--set":
            pairs.append(next(it, ""))
        elif arg.startswith("--set="):
            pairs.append(arg[len("--set="):])
        else:
            rest.append(arg)
    return rest, pairs


def apply_overrides(pairs: List[str]) -> bool:
    """Applies the overrides, printing each one that was rejected."""
    rejected = config_manager.apply_overrides(pairs)
    for pair in rejected:
        print(f"❌ Invalid config override '{pair}'. Use --set KEY=VALUE, e.g. io.encoding=latin-1")
    return not rejected


def handle_config(args: List[str]) -> int:
    """Handles the 'config' command for inspecting the audit configuration."""
    args, pairs = split_overrides(args)
    if not apply_overrides(pairs):
        return 1

    if not args:
        print(USAGE)
        return 1

    command = args[0]

    if command == "list":
        print(json.dumps(config_manager.get_all(), indent=2, ensure_ascii=False))
        return 0

    if command == "get":
        if len(args) != 2:
            print("Usage: config get <key>")
            return 1
        value = config_manager.get_nested(args[1])
        if value is None:
            print(f"❌ Unknown config key '{args[1]}'.")
            return 1
        print(json.dumps(value, ensure_ascii=False))
        return 0

    if command == "check":
        return _check()

    print(f"Unknown command: 'config {command}'.")
    return 1


def _check() -> int:
    problems = []

    try:
        encoding = config_manager.get_encoding()
        print(f"✅ io.encoding = {encoding}")
    except ValueError as e:
        problems.append(str(e))

    catalog = RuleCatalog()
    extra = config_manager.get_extra_rules()
    added = sum(1 for rule in extra if catalog.add_from_dict(rule))
    print(f"✅ audit.extra_rules: {added} of {len(extra)} rule(s) usable (catalog size: {len(catalog)})")

    try:
        indices = config_manager.get_rule_indices()
        catalog.resolve(indices)
        print(f"✅ audit.default_rules = {indices}")
    except (ValueError, IndexOutOfRangeError) as e:
        problems.append(str(e))

    for problem in problems:
        logger.error("Config check failed: %s", problem)
        print(f"❌ {problem}")
    return 1 if problems else 0
