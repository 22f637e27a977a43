#!/usr/bin/env python3
"""
Tool Detector - Picks which concrete tool provides a capability on this host

Each capability has a fixed, ranked list of candidates.  Detection only looks
at the filesystem (is the file there, is it executable); it never runs
anything.  The first candidate found wins; if none is found the result is
None and the caller reports the capability as unsupported.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolCandidate:
    name: str
    paths: Tuple[str, ...]
    command: Tuple[str, ...]


@dataclass(frozen=True)
class ToolChoice:
    """A detected tool; command[0] is the resolved executable path."""
    name: str
    path: str
    command: Tuple[str, ...]


PACKAGE_MANAGER = "package_manager"
NETWORK_TOOL = "network_tool"
FLATPAK = "flatpak"

# ── Capability table ───────────────────────────────────────────────────────────
# Order matters: pacman outranks dpkg, which outranks rpm; ip outranks ifconfig.
CAPABILITIES: Dict[str, Tuple[ToolCandidate, ...]] = {
    PACKAGE_MANAGER: (
        ToolCandidate("pacman", ("/usr/bin/pacman",), ("pacman", "-Qq")),
        ToolCandidate(
            "dpkg",
            ("/usr/bin/dpkg-query", "/bin/dpkg-query"),
            ("dpkg-query", "-f", "${binary:Package}\n", "-W"),
        ),
        ToolCandidate("rpm", ("/usr/bin/rpm", "/bin/rpm"), ("rpm", "-qa")),
    ),
    NETWORK_TOOL: (
        ToolCandidate(
            "ip",
            ("/usr/bin/ip", "/usr/sbin/ip", "/sbin/ip", "/bin/ip"),
            ("ip", "-4", "addr", "show"),
        ),
        ToolCandidate(
            "ifconfig",
            ("/usr/bin/ifconfig", "/usr/sbin/ifconfig", "/sbin/ifconfig", "/bin/ifconfig"),
            ("ifconfig",),
        ),
    ),
    FLATPAK: (
        ToolCandidate(
            "flatpak",
            ("/usr/bin/flatpak",),
            ("flatpak", "list", "--app", "--columns=application"),
        ),
    ),
}


class ToolDetector:
    """Resolves capabilities to the first installed candidate."""

    def __init__(self, root: str = ""):
        self.root = root.rstrip("/")

    def _full_path(self, path: str) -> str:
        return self.root + path if self.root else path

    def _is_executable(self, path: str) -> bool:
        full = self._full_path(path)
        return os.path.isfile(full) and os.access(full, os.X_OK)

    def detect(self, capability: str) -> Optional[ToolChoice]:
        """Return the first present candidate for a capability, or None.

        Raises KeyError for a capability that is not in the table.
        """
        for candidate in CAPABILITIES[capability]:
            for path in candidate.paths:
                if self._is_executable(path):
                    full = self._full_path(path)
                    logger.debug("%s: using %s (%s)", capability, candidate.name, full)
                    return ToolChoice(
                        name=candidate.name,
                        path=full,
                        command=(full,) + candidate.command[1:],
                    )
        logger.debug("%s: no candidate found", capability)
        return None
