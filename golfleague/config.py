"""League configuration loading and normalization."""

import logging
from pathlib import Path
from typing import Any

from .schemas import LeagueConfig
from .utils import load_json

logger = logging.getLogger('golfleague.config')


def normalize_config(raw: dict[str, Any] | LeagueConfig) -> LeagueConfig:
    """
    Canonicalize a raw league document.

    Folds the legacy ``format.*`` block into the top-level shape (top-level
    values win), fills missing point values with 1/1/0/0/0, and maps unknown
    policy values to their defaults. Scoring code only ever sees the result.

    Example:
        config = normalize_config({'format': {'absentRule': 'worst_score'}})
        config.absence.rule
        # -> 'worst_score'
    """
    if isinstance(raw, LeagueConfig):
        return raw

    fmt = raw.get('format') or {}
    if fmt:
        shadowed = [k for k in fmt if raw.get(k) is not None]
        if shadowed:
            logger.debug(f'Top-level config overrides format.* for: {", ".join(sorted(shadowed))}')

    return LeagueConfig.model_validate(raw)


def load_league_config(path: Path | str) -> LeagueConfig:
    """
    Load and validate a league document from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the document doesn't validate
    """
    return load_json(path, schema=LeagueConfig)
