"""Locate a tool report from a settings key, falling back to a default path."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def resolve_report_path(settings, file_system, key: str, default: str) -> Path:
    """Return the report file configured under *key*, or *default*.

    Relative paths are resolved against the project base directory; an
    absolute path is used unmodified. Existence is not checked here.
    """
    report_path = settings.get_string(key)
    if report_path is None:
        logger.debug("'%s' not set, using default report path '%s'", key, default)
        report_path = default

    report_file = Path(report_path)
    if not report_file.is_absolute():
        report_file = Path(file_system.base_dir) / report_path
    return report_file
