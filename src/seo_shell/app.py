from __future__ import annotations

import logging
import sys

from seo_shell.core.handlers.audit_handler import handle_audit
from seo_shell.core.managers.config_manager import config_manager
from seo_shell.core.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for running the auditor from the command line."""
    configure_logger(
        config_manager.get_nested("debug.level", "WARNING"),
        module_specific_levels=config_manager.get_nested("debug.modules"),
    )
    args = list(sys.argv[1:] if argv is None else argv)
    logger.debug("Starting seo-audit with arguments: %s", args)
    return handle_audit(args)


if __name__ == "__main__":
    sys.exit(main())
