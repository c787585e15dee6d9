"""Utility functions for JSON document I/O and number formatting."""

import json
import logging
import math
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('golfleague.utils')


def round_tenth(value: float) -> float:
    """Round to one decimal place, halves going up (4.25 -> 4.3)."""
    return math.floor(value * 10 + 0.5) / 10


def sanitize_document(obj: Any) -> Any:
    """
    Strip values a document store will reject.

    Removes None and NaN recursively from dicts and lists, and dumps
    pydantic models using their camelCase aliases.

    Example:
        sanitize_document({'result': None, 'scores': {'p1': [4, 5]}})
        # -> {'scores': {'p1': [4, 5]}}
    """
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(by_alias=True)
    if isinstance(obj, dict):
        return {
            k: sanitize_document(v)
            for k, v in obj.items()
            if v is not None and not (isinstance(v, float) and math.isnan(v))
        }
    if isinstance(obj, (list, tuple)):
        return [
            sanitize_document(v)
            for v in obj
            if v is not None and not (isinstance(v, float) and math.isnan(v))
        ]
    return obj


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load a JSON file with optional schema validation.

    Args:
        path: Path to JSON file
        schema: Optional pydantic model to validate against

    Returns:
        Parsed JSON (validated if schema provided)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If schema validation fails

    Example:
        from golfleague.schemas import LeagueConfig
        config = load_json('data/league.json', schema=LeagueConfig)
    """
    path = Path(path)

    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema:
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            logger.error(f'Schema validation failed for {path}: {e}')
            raise ValueError(f'Schema validation failed for {path}:\n{e}') from e

    return data


def save_json(
    path: Path | str,
    data: Any,
    indent: int = 2,
    create_dirs: bool = True,
) -> None:
    """
    Save data as a JSON file.

    Pydantic models are dumped with their document (camelCase) keys.

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If file cannot be written
    """
    path = Path(path)

    if create_dirs:
        path.parent.mkdir(parents=True, exist_ok=True)

    json_data = data.model_dump(by_alias=True) if isinstance(data, BaseModel) else data

    # Write to a sibling temp file, then swap it into place
    tmp_path = path.with_suffix(path.suffix + '.tmp')
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, indent=indent, ensure_ascii=False)
        tmp_path.replace(path)
        logger.debug(f'Saved JSON to: {path}')
    except TypeError as e:
        logger.error(f'Data is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e
    except OSError as e:
        logger.error(f'Failed to write file {path}: {e}')
        raise


def load_json_safe(path: Path | str, default: Any = None) -> Any:
    """Load a JSON file, returning ``default`` if it is missing or malformed."""
    try:
        return load_json(path)
    except (FileNotFoundError, json.JSONDecodeError):
        return default
