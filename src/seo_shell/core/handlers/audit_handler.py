# src/seo_shell/core/handlers/audit_handler.py
import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from tqdm.auto import tqdm

from seo_auditor.controllers.audit_controller import SEOAuditor
from seo_auditor.exceptions import IndexOutOfRangeError, InputError, NotReadyError
from seo_auditor.managers.rule_catalog_manager import RuleCatalog
from seo_auditor.services.output_service import export_results, write_console, write_file
from seo_shell.core.handlers.config_handler import apply_overrides, handle_config
from seo_shell.core.managers.config_manager import config_manager
from seo_shell.core.utils.configure_logging import configure_logger
from seo_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

COMMAND_HIERARCHY: Dict[str, Optional[Dict[str, Any]]] = {
    "run": None,
    "rules": None,
    "config": None,
}

STDIN_MARKER = "-"


def _build_parser() -> argparse.ArgumentParser:
    # Catalog and config options, shared by run and rules
    rule_opts = argparse.ArgumentParser(add_help=False)
    rule_opts.add_argument("--add-attr", nargs=2, action="append", default=[], metavar=("TAG", "ATTR"),
                           help="Add a rule: <TAG> should have attribute ATTR.")
    rule_opts.add_argument("--add-child", nargs=2, action="append", default=[], metavar=("TAG", "CHILD"),
                           help="Add a rule: <TAG> should contain <CHILD>.")
    rule_opts.add_argument("--add-child-attr", nargs=4, action="append", default=[],
                           metavar=("TAG", "CHILD", "ATTR", "VAL"),
                           help="Add a rule: <TAG> should contain <CHILD ATTR=\"VAL\">.")
    rule_opts.add_argument("--add-count", nargs=2, action="append", default=[], metavar=("TAG", "N"),
                           help="Add a rule: compare the number of <TAG> against N.")
    rule_opts.add_argument("--set", action="append", default=[], metavar="KEY=VALUE", dest="overrides",
                           help="Override a config value for this run, e.g. io.encoding=latin-1.")

    parser = argparse.ArgumentParser(prog="seo-audit", description="Evaluate SEO rules against HTML files.")
    subparsers = parser.add_subparsers(dest="subcommand", help="Audit subcommands")

    # 1. Subcommand: RUN
    run_parser = subparsers.add_parser("run", parents=[rule_opts], help="Evaluate rules against HTML files")
    run_parser.add_argument("files", nargs="+", help=f"HTML files to audit ('{STDIN_MARKER}' reads stdin).")
    run_parser.add_argument("--rules", type=str, default=None, help="Comma separated rule indices, e.g. 0,2,5.")
    run_parser.add_argument("--output", "-o", type=str, default=None, help="Also write the results to this file.")
    run_parser.add_argument("--export", type=str, default=None, help="Export results to .csv, .json or .xlsx.")

    # 2. Subcommand: RULES
    subparsers.add_parser("rules", parents=[rule_opts], help="List the rule catalog")

    # 3. Subcommand: CONFIG (dispatched to the config handler before parsing)
    subparsers.add_parser("config", help="Inspect the configuration (list, get, check)")

    return parser


def handle_audit(args: List[str]) -> int:
    """
    Handler for the audit commands.

    Returns:
        0 for success, 1 for errors.
    """
    parser = _build_parser()

    try:
        if not args:
            parser.print_help()
            return 0

        if args[0] == "config":
            return handle_config(list(args[1:]))

        if args[0] not in COMMAND_HIERARCHY and args[0] not in ("-h", "--help"):
            args = ["run"] + list(args)

        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        return 0 if e.code in (0, None) else 1

    if not _apply_overrides(parsed_args.overrides):
        return 1

    auditor = _build_auditor(parsed_args)

    if parsed_args.subcommand == "rules":
        return _handle_rules(auditor)
    elif parsed_args.subcommand == "run":
        return _handle_run(parsed_args, auditor)

    return 0


def _build_auditor(parsed_args: argparse.Namespace) -> SEOAuditor:
    """Creates an auditor whose catalog holds the configured and requested extra rules."""
    catalog = RuleCatalog()
    for rule in config_manager.get_extra_rules():
        catalog.add_from_dict(rule)

    auditor = SEOAuditor(catalog)

    requested = (
        [(auditor.add_rule_attr, tuple(v)) for v in parsed_args.add_attr]
        + [(auditor.add_rule_child_tag, tuple(v)) for v in parsed_args.add_child]
        + [(auditor.add_rule_child_tag_attr_val, tuple(v)) for v in parsed_args.add_child_attr]
        + [(auditor.add_rule_tag_count, (tag, _to_int(n))) for tag, n in parsed_args.add_count]
    )
    for add, params in requested:
        if not add(*params):
            print(f"⚠️  Rule {params} not added (invalid or duplicate).")

    return auditor


def _to_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


def _apply_overrides(pairs: List[str]) -> bool:
    if not pairs:
        return True
    if not apply_overrides(pairs):
        return False
    if any(pair.startswith("debug.") for pair in pairs):
        configure_logger(
            config_manager.get_nested("debug.level", "WARNING"),
            module_specific_levels=config_manager.get_nested("debug.modules"),
        )
    return True


def _parse_indices(raw: Optional[str]) -> List[int]:
    if raw is None:
        return config_manager.get_rule_indices()
    return [int(part) for part in raw.split(",") if part.strip()]


def _handle_rules(auditor: SEOAuditor) -> int:
    print("=== Current SEO Rules ===")
    for idx, msg in auditor.list_rules():
        print(f"Rule Index : {idx} => {msg}")
    print("=========================")
    return 0


def _handle_run(parsed_args: argparse.Namespace, auditor: SEOAuditor) -> int:
    try:
        indices = _parse_indices(parsed_args.rules)
    except ValueError as e:
        if parsed_args.rules is None:
            logger.error("Invalid configuration: %s", e)
            print(f"❌ {e}")
        else:
            print(f"❌ Invalid rule indices: '{parsed_args.rules}'. Use e.g. --rules 0,2,5")
        return 1

    try:
        encoding = config_manager.get_encoding()
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        print(f"❌ {e}")
        return 1

    files = parsed_args.files
    records: List[Dict[str, Any]] = []
    all_results: List[str] = []

    for path in tqdm(files, desc="Auditing", unit="file", disable=len(files) < 2):
        try:
            if path == STDIN_MARKER:
                auditor.load_stream(sys.stdin, encoding=encoding)
            else:
                auditor.load_file(path, encoding=encoding)
            results = auditor.evaluate(indices)
        except FileNotFoundError as e:
            print(f"❌ {e}")
            return 1
        except UnicodeDecodeError as e:
            logger.error("Audit of %s failed: %s", path, e)
            print(f"❌ {path} is not valid {encoding} ({e.reason} at byte {e.start}). "
                  f"Try --set io.encoding=<codec>.")
            return 1
        except (IndexOutOfRangeError, InputError, NotReadyError, OSError, ValueError) as e:
            logger.error("Audit of %s failed: %s", path, e)
            print(f"❌ {e}")
            return 1

        if len(files) > 1:
            print(f"\n📄 {path}")
        write_console(results)

        all_results.extend(results)
        records.extend(
            {"file": path, "rule_index": idx, "result": res}
            for idx, res in zip(indices, results)
        )

    try:
        if parsed_args.output:
            write_file(all_results, PathUtils.resolve_output_path(parsed_args.output), encoding=encoding)
            print(f"💾 Results written to {parsed_args.output}")

        if parsed_args.export:
            export_results(records, PathUtils.resolve_output_path(parsed_args.export))
            print(f"📦 {len(records)} result(s) exported to {parsed_args.export}")
    except (OSError, ValueError) as e:
        logger.error("Writing results failed: %s", e)
        print(f"❌ {e}")
        return 1

    return 0
