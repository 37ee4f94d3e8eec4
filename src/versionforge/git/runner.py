"""Runs git commands in a working directory."""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from versionforge.errors import GitError
from versionforge.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GitCommandResult:
    """Result of a git invocation.

    Attributes:
        args: Arguments passed to git
        returncode: Process exit code
        stdout: Decoded standard output
        stderr: Decoded standard error
    """

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def check(self) -> "GitCommandResult":
        """Return self, raising GitError if the command failed."""
        if not self.ok:
            raise GitError(self.args, self.returncode, self.stderr)
        return self


class GitRunner:
    """Executes ``git`` as a subprocess in ``working_dir``."""

    def __init__(self, working_dir: Union[str, Path] = ".", git_executable: str = "git") -> None:
        self.working_dir = Path(working_dir)
        self.git_executable = git_executable

    async def run(self, *args: str, timeout: Optional[float] = None) -> GitCommandResult:
        """Run git with ``args``.

        Args:
            *args: Arguments to git, e.g. ("rev-parse", "HEAD")
            timeout: Seconds to wait before killing the process

        Returns:
            GitCommandResult with the decoded output

        Raises:
            asyncio.TimeoutError: If the command exceeds ``timeout``
            GitError: If the git executable cannot be started
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self.git_executable,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(self.working_dir),
            )
        except OSError as e:
            raise GitError(args, -1, str(e)) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            # Kill process on timeout
            process.kill()
            await process.wait()
            raise

        result = GitCommandResult(
            args=tuple(args),
            returncode=process.returncode or 0,
            stdout=stdout.decode("utf-8", errors="replace").strip(),
            stderr=stderr.decode("utf-8", errors="replace").strip(),
        )
        logger.debug("git_command", args=list(args), returncode=result.returncode)
        return result
