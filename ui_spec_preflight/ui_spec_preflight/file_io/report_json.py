import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Union

from .source_location import SourceLocation, format_source

logger = logging.getLogger(__name__)


def dump_json(payload: Dict[str, Any]) -> str:
    """Serialize a payload the same way on every run."""

    return json.dumps(payload, indent=2, ensure_ascii=True) + "\n"


def save_json(output_path: Union[str, Path], payload: Dict[str, Any], *, label: str = "JSON") -> None:
    """Save a report or manifest payload to JSON."""

    output_path = str(output_path)
    parent = os.path.dirname(output_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    try:
        with open(output_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(dump_json(payload))
        logger.info(f"Saved {label}: {output_path}")
    except OSError as e:
        src = SourceLocation(file_path=Path(output_path))
        logger.error(f"Failed to save {label}: {output_path}: {e}{format_source(src)}")
        raise


def load_json(input_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a previously saved payload."""

    try:
        with open(input_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        src = SourceLocation(file_path=Path(input_path))
        logger.error(f"Failed to load JSON: {input_path}: {e}{format_source(src)}")
        raise
