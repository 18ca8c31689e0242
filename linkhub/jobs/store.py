"""JSON artifact storage for the stats and media-kit documents.

Writes go to a temporary file in the target's directory which then replaces
the target, so a reader sees either the old or the new document.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def dump_json(document: Any) -> str:
    """Serialize the way the site's data files are formatted."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def write_json_atomic(path: Path, document: Any) -> None:
    """Replace *path* with *document* in one rename."""
    content = dump_json(document)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        # Leave the target untouched and clean up the partial temp file
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    logger.debug(f"Wrote {path}")


def read_json_object(path: Path) -> dict[str, Any]:
    """Load a JSON object from *path*.

    Raises FileNotFoundError when the file is missing and ValueError when it
    is not a JSON object.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data
