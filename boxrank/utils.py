"""JSON file helpers shared by snapshot loading, config loading and exports."""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('boxrank.utils')


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Read a JSON file, validating it against a pydantic model when given.

    Args:
        path: Snapshot, config or export file
        schema: Model the parsed document must satisfy (e.g. SnapshotFile)

    Returns:
        The raw document, or the validated model instance

    Raises:
        FileNotFoundError: If the file is missing
        json.JSONDecodeError: If the file is not JSON
        ValueError: If the document does not match schema
    """
    path = Path(path)
    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    with open(path, encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
            raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e
    logger.debug(f'Read {path}')

    if schema is None:
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} does not match {schema.__name__}: {e.error_count()} error(s)')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write data as UTF-8 JSON, creating parent directories.

    Pydantic models are dumped in JSON mode so datetimes become ISO strings.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(data, BaseModel):
        data = data.model_dump(mode='json')

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
    except TypeError as e:
        logger.error(f'Cannot serialise data for {path}: {e}')
        raise
    logger.debug(f'Wrote {path}')


def load_json_safe(
    path: Path | str,
    default: Any = None,
    schema: type[T] | None = None,
) -> Any | T:
    """Like load_json, but return default when the file is missing or invalid."""
    try:
        return load_json(path, schema=schema)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        return default
