"""
Process runner for every external tool repovol drives (git, btrfs).

Each invocation is logged with its wall-clock duration and full command
line, whether it succeeds or not. Failures are logged and re-raised
unchanged: a non-zero exit becomes a CommandError (a CalledProcessError
that also shows the tool's stderr), and an OSError raised while starting
the process propagates as is.
"""

import logging
import subprocess
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class CommandError(subprocess.CalledProcessError):
    """Raised when an external command exits with a non-zero status."""

    def __str__(self) -> str:
        message = super().__str__()
        stderr = (self.stderr or "").strip()
        if stderr:
            return f"{message}: {stderr}"
        return message


def format_command(args: Sequence[PathLike]) -> str:
    return " ".join(str(arg) for arg in args)


@contextmanager
def timed(description: str) -> Iterator[None]:
    """Log how long the enclosed block took, even when it raises."""
    start = time.monotonic()
    try:
        yield
    finally:
        elapsed = time.monotonic() - start
        logger.info(f"TIME: {elapsed:.3f}s '{description}'")


def _execute(
    args: Sequence[PathLike], cwd: Optional[PathLike]
) -> subprocess.CompletedProcess:
    argv = [str(arg) for arg in args]
    try:
        with timed(format_command(argv)):
            result = subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
            )
    except OSError as e:
        logger.error(e)
        raise

    if result.returncode != 0:
        error = CommandError(
            result.returncode, argv, output=result.stdout, stderr=result.stderr
        )
        logger.error(error)
        raise error

    return result


def run_command(args: Sequence[PathLike], cwd: Optional[PathLike] = None) -> None:
    """
    Run an external command to completion, discarding its output.

    Args:
        args: Executable name followed by its arguments
        cwd: Working directory for the command (defaults to the current one)

    Raises:
        CommandError: If the command exits with a non-zero status
        OSError: If the command cannot be started
    """
    _execute(args, cwd)


def command_output(args: Sequence[PathLike], cwd: Optional[PathLike] = None) -> str:
    """
    Run an external command and return its standard output.

    Args:
        args: Executable name followed by its arguments
        cwd: Working directory for the command (defaults to the current one)

    Returns:
        The captured standard output, unmodified

    Raises:
        CommandError: If the command exits with a non-zero status
        OSError: If the command cannot be started
    """
    return _execute(args, cwd).stdout
