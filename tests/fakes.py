"""Test doubles shared across the test suite."""

from typing import Optional

from versionforge.git.runner import GitCommandResult, GitRunner


class FakeGitRunner(GitRunner):
    """GitRunner answering from canned responses instead of running git.

    Responses are keyed by the argument tuple. Unknown commands fail with
    exit code 128, like git does for bad revisions.
    """

    def __init__(self) -> None:
        super().__init__(working_dir=".")
        self.responses: dict[tuple[str, ...], object] = {}
        self.calls: list[tuple[str, ...]] = []

    def respond(self, *args: str, stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        self.responses[args] = GitCommandResult(args, returncode, stdout, stderr)

    def fail_with(self, *args: str, exc: BaseException) -> None:
        self.responses[args] = exc

    async def run(self, *args: str, timeout: Optional[float] = None) -> GitCommandResult:
        self.calls.append(args)
        response = self.responses.get(args)
        if response is None:
            return GitCommandResult(args, 128, "", f"fatal: unexpected command {' '.join(args)}")
        if isinstance(response, BaseException):
            raise response
        assert isinstance(response, GitCommandResult)
        return response
