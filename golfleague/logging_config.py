"""Logging setup for league scoring runs and the approval audit trail."""

import logging
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

APPROVAL_LOGGER = 'golfleague.approval'
AUDIT_FILE = 'approvals.log'


def log_file_stem(league_name: Optional[str]) -> str:
    """Filesystem-safe stem for a league's log files, e.g. ``tuesday_night_nine``."""
    slug = re.sub(r'[^a-z0-9]+', '_', (league_name or '').lower()).strip('_')
    return slug or 'golfleague'


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    league_name: Optional[str] = None,
    audit: bool = False,
) -> logging.Logger:
    """
    Configure the ``golfleague`` logger.

    Approval transitions log at INFO; data fallbacks (no history, manual
    adjustments) log at DEBUG. With ``audit`` on, every approval transition
    is also appended to ``approvals.log`` in the log directory, which
    survives across runs and ignores the package level.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level (default: INFO)
        log_to_file: Whether to log to a timestamped file named after the league
        log_to_console: Whether to log to stdout
        league_name: League name used for the run log file name
        audit: Whether to keep the approval audit log

    Returns:
        The configured package logger

    Example:
        from golfleague.logging_config import setup_logging
        logger = setup_logging(league_name='Tuesday Night Nine', audit=True)
    """
    logger = logging.getLogger('golfleague')
    logger.setLevel(level)
    logger.handlers = []

    approval_logger = logging.getLogger(APPROVAL_LOGGER)
    for handler in approval_logger.handlers:
        handler.close()
    approval_logger.handlers = []
    approval_logger.setLevel(logging.NOTSET)

    log_dir = Path(log_dir) if log_dir is not None else Path('logs')
    if log_to_file or audit:
        log_dir.mkdir(parents=True, exist_ok=True)

    if log_to_file:
        stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        file_handler = logging.FileHandler(log_dir / f'{log_file_stem(league_name)}_{stamp}.log')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(console_handler)

    if audit:
        # transitions are INFO; keep them even when the package runs at WARNING
        approval_logger.setLevel(logging.INFO)
        audit_handler = logging.FileHandler(log_dir / AUDIT_FILE, mode='a')
        audit_handler.setLevel(logging.INFO)
        audit_handler.setFormatter(logging.Formatter('%(asctime)s\t%(message)s', datefmt='%Y-%m-%d %H:%M:%S'))
        approval_logger.addHandler(audit_handler)

    return logger
