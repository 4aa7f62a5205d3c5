"""Execute-and-capture primitive for external commands."""
import subprocess
from typing import List, Optional, Protocol, Sequence

from opskit.core.logger import get_logger

logger = get_logger(__name__)


class CommandFailed(Exception):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int, output: str):
        self.cmd = list(args)
        self.returncode = returncode
        self.output = output
        super().__init__(output or f"{self.cmd[0]} exited with status {returncode}")


class CommandRunner(Protocol):
    """Anything that can run a command and hand back its stdout."""

    def run(self, args: Sequence[str], input: Optional[str] = None) -> str:
        ...


class SubprocessRunner:
    """Runs commands with subprocess, capturing both output streams."""

    def run(self, args: Sequence[str], input: Optional[str] = None) -> str:
        """Run a command and return its stripped stdout.

        Args:
            args: Executable followed by its arguments
            input: Text written to the command's stdin (stdin is inherited when None)

        Returns:
            Standard output with surrounding whitespace removed

        Raises:
            CommandFailed: If the command exits non-zero. Carries stderr,
                or stdout when stderr is empty.
        """
        cmd: List[str] = [str(arg) for arg in args]
        logger.debug(f"Running: {' '.join(cmd)}")

        result = subprocess.run(
            cmd,
            input=input,
            capture_output=True,
            text=True,
            check=False,
        )

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            stdout = (result.stdout or "").strip()
            logger.debug(f"{cmd[0]} exited with {result.returncode}: {stderr or stdout}")
            raise CommandFailed(cmd, result.returncode, stderr or stdout)

        return (result.stdout or "").strip()
