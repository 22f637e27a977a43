#!/usr/bin/env python3
"""
Command Runner - Runs fixed external commands and captures their output

Commands are always argument lists (never a shell string), and every run is
bounded by a timeout.  A missing program, a non-zero exit or an expired
timeout all come back as a failed CommandResult; nothing here raises.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)

DEFAULT_COMMAND_TIMEOUT = 5  # seconds


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single command invocation."""
    ok: bool
    stdout: str = ""

    def lines(self) -> list:
        """Non-empty output lines."""
        return [line for line in self.stdout.splitlines() if line.strip()]


class CommandRunner:
    """Runs commands synchronously, one at a time."""

    def __init__(self, timeout: float = DEFAULT_COMMAND_TIMEOUT):
        self.timeout = timeout

    def run(self, argv: Sequence[str]) -> CommandResult:
        try:
            result = subprocess.run(
                list(argv),
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug("%s timed out after %ss", argv[0], self.timeout)
            return CommandResult(ok=False)
        except (OSError, ValueError) as e:
            logger.debug("failed to start %s: %s", argv[0], e)
            return CommandResult(ok=False)

        if result.returncode != 0:
            logger.debug(
                "%s exited with %d: %s",
                argv[0], result.returncode, result.stderr.strip(),
            )
        return CommandResult(ok=result.returncode == 0, stdout=result.stdout)
