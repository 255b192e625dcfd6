"""Temporary files handed to commands that take a second parameter."""

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager

from simplecli.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def scratch_file(prefix: str = "simplecli") -> Iterator[str]:
    """Create an empty, closed temporary file and remove it afterwards.

    The file is removed however the body exits, including when it
    already deleted the file itself.

    Raises:
        OSError: If the file can't be created.
    """
    fd, path = tempfile.mkstemp(prefix=prefix)
    os.close(fd)
    logger.debug("Created scratch file %s", path)
    try:
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove scratch file %s: %s", path, e)
        else:
            logger.debug("Removed scratch file %s", path)
