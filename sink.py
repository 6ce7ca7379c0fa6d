import os
import json
import logging
from datetime import date, datetime

from lex_client import ExportError

logger = logging.getLogger(__name__)


class WriteError(ExportError):
    """The export could not be written to its destination file."""

    def __init__(self, path, error):
        self.path = path
        self.error = error
        super().__init__(f"Could not write {path}: {error}")


def _json_default(value):
    # boto3 returns createdDate / lastUpdatedDate as datetime objects
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render(bot_definition, pretty=False):
    """
    Compact output is a single line. Pretty output sorts every object's keys
    and indents by two spaces, so it is stable across runs.
    """
    if pretty:
        return json.dumps(
            bot_definition, indent=2, sort_keys=True,
            ensure_ascii=False, default=_json_default,
        )
    return json.dumps(
        bot_definition, separators=(',', ':'),
        ensure_ascii=False, default=_json_default,
    )


def output_path(bot_name, directory=None, filename=None):
    return os.path.join(directory or '.', filename or f"{bot_name}.json")


def write_output(text, path):
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        logger.error("Error writing %s: %s", path, e)
        raise WriteError(path, e) from e
    logger.info("Wrote %d characters to %s", len(text), path)
    return path
