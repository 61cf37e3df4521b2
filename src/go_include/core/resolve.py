import logging
from pathlib import Path

from go_include.errors import ReadError

logger = logging.getLogger(__name__)


def resolve_path(filename: str, working_dir: str | None = None) -> Path:
    path = Path(working_dir) / filename if working_dir else Path(filename)
    return path.absolute()


def read_include_file(filename: str, working_dir: str | None = None) -> bytes:
    """Read ``filename``, relative to ``working_dir`` when one is given."""
    path = resolve_path(filename, working_dir)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise ReadError(str(path), e.strerror or str(e)) from e
    logger.debug("Read %d bytes from %s", len(content), path)
    return content
