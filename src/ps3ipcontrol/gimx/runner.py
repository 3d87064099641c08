"""External process execution.

Every effect on the console is an invocation of an external command.
:class:`CommandRunner` is the narrow interface the control logic depends
on; :class:`SubprocessRunner` implements it with asyncio subprocesses.
Process output is always discarded, only the exit status matters.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Sequence

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when an external command cannot be started or exits non-zero."""

    def __init__(self, message: str, argv: Sequence[str] = (), returncode: int | None = None) -> None:
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode


class CommandRunner(ABC):
    """Abstract capability for running external commands."""

    @abstractmethod
    async def run(self, argv: Sequence[str]) -> int:
        """Run a command to completion and return its exit status.

        Raises:
            CommandError: If the command cannot be started.
        """
        ...

    @abstractmethod
    async def spawn(self, argv: Sequence[str]) -> None:
        """Start a command in the background without waiting for it.

        Raises:
            CommandError: If the command cannot be started.
        """
        ...

    async def check(self, argv: Sequence[str]) -> None:
        """Run a command and raise :class:`CommandError` on non-zero exit."""
        returncode = await self.run(argv)
        if returncode != 0:
            raise CommandError(
                f"Command {' '.join(argv)!r} exited with status {returncode}",
                argv=argv,
                returncode=returncode,
            )


class SubprocessRunner(CommandRunner):
    """Runs commands as asyncio subprocesses with output sent to /dev/null."""

    def __init__(self) -> None:
        self._background: list[asyncio.subprocess.Process] = []

    async def _start(self, argv: Sequence[str]) -> asyncio.subprocess.Process:
        try:
            return await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise CommandError(f"Cannot start {argv[0]}: {e}", argv=argv) from e

    async def run(self, argv: Sequence[str]) -> int:
        process = await self._start(argv)
        returncode = await process.wait()
        logger.debug("%s -> %d", " ".join(argv), returncode)
        return returncode

    async def spawn(self, argv: Sequence[str]) -> None:
        process = await self._start(argv)
        # Keep a reference so the child can be reaped when it exits
        self._background = [p for p in self._background if p.returncode is None]
        self._background.append(process)
        logger.info("Started background process %s (pid=%d)", argv[0], process.pid)
