#!/usr/bin/env python3
"""
System Reader - Thin access layer over pseudo-files and environment variables

Every read returns the raw text or None.  A None means "unavailable"; it is up
to the caller to decide whether that is a degraded fact or a hard failure.

The optional root prefix mirrors the hostfs trick used for snaps: all absolute
paths are resolved beneath it, which is also how the tests point the reader at
a fake filesystem tree.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


class SystemReader:
    """Reads small pseudo-files, environment variables and file metadata."""

    def __init__(self, root: str = "", environ: Optional[dict] = None):
        self.root = root.rstrip("/")
        self._environ = environ if environ is not None else os.environ

    def resolve(self, path: str) -> str:
        """Return the path as seen beneath the configured root."""
        if not self.root:
            return path
        return self.root + "/" + path.lstrip("/")

    def read(self, path: str) -> Optional[str]:
        """Read a whole file as text, or None if it cannot be opened or decoded."""
        try:
            with open(self.resolve(path), "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("cannot read %s: %s", path, e)
            return None

    def getenv(self, name: str) -> Optional[str]:
        return self._environ.get(name)

    def stat(self, path: str) -> Optional[os.stat_result]:
        try:
            return os.stat(self.resolve(path))
        except OSError as e:
            logger.debug("cannot stat %s: %s", path, e)
            return None
