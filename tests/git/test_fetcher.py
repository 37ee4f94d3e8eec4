"""Tests for fetching tags from git remotes."""

import asyncio

import pytest

from tests.fakes import FakeGitRunner
from versionforge.errors import GitError
from versionforge.git import FetchResult, fetch_remote_tags


class TestFetchRemoteTags:
    """Tests for fetch_remote_tags."""

    @pytest.mark.asyncio
    async def test_fetches_existing_remotes_in_order(self, fake_runner: FakeGitRunner) -> None:
        """Only remotes that exist are fetched."""
        fake_runner.respond("remote", stdout="origin\nupstream\n")
        fake_runner.respond("fetch", "--tags", "upstream", stderr="From github.com:org/repo")
        fake_runner.respond("fetch", "--tags", "origin")

        results = await fetch_remote_tags(fake_runner, ["upstream", "origin", "fork"], timeout=15)

        assert [r.remote for r in results] == ["upstream", "origin"]
        assert all(r.success for r in results)
        assert results[0].message == "From github.com:org/repo"
        assert ("fetch", "--tags", "fork") not in fake_runner.calls

    @pytest.mark.asyncio
    async def test_failed_fetch_is_reported(self, fake_runner: FakeGitRunner) -> None:
        """A failing fetch is reported, not raised."""
        fake_runner.respond("remote", stdout="origin")
        fake_runner.respond(
            "fetch", "--tags", "origin", returncode=128, stderr="fatal: could not read from remote"
        )

        results = await fetch_remote_tags(fake_runner, ["origin"], timeout=15)

        assert results == [
            FetchResult(remote="origin", success=False, message="fatal: could not read from remote")
        ]

    @pytest.mark.asyncio
    async def test_timeout_is_reported(self, fake_runner: FakeGitRunner) -> None:
        """A timed out fetch is reported, not raised."""
        fake_runner.respond("remote", stdout="origin")
        fake_runner.fail_with("fetch", "--tags", "origin", exc=asyncio.TimeoutError())

        results = await fetch_remote_tags(fake_runner, ["origin"], timeout=1)

        assert len(results) == 1
        assert results[0].timed_out
        assert not results[0].success

    @pytest.mark.asyncio
    async def test_remote_listing_failure(self, fake_runner: FakeGitRunner) -> None:
        """Nothing is fetched when remotes cannot be listed."""
        results = await fetch_remote_tags(fake_runner, ["origin"], timeout=15)

        assert results == []

    @pytest.mark.asyncio
    async def test_git_error_during_fetch_is_reported(self, fake_runner: FakeGitRunner) -> None:
        """A git process that cannot be started is reported per remote."""
        fake_runner.respond("remote", stdout="origin\nupstream")
        fake_runner.fail_with(
            "fetch", "--tags", "origin", exc=GitError(("fetch", "--tags", "origin"), -1, "no such file")
        )
        fake_runner.respond("fetch", "--tags", "upstream")

        results = await fetch_remote_tags(fake_runner, ["origin", "upstream"], timeout=15)

        assert [r.remote for r in results] == ["origin", "upstream"]
        assert not results[0].success
        assert not results[0].timed_out
        assert "no such file" in results[0].message
        assert results[1].success

    @pytest.mark.asyncio
    async def test_git_error_during_remote_listing(self, fake_runner: FakeGitRunner) -> None:
        """Nothing is fetched when git cannot be started to list remotes."""
        fake_runner.fail_with("remote", exc=GitError(("remote",), -1, "no such file"))

        results = await fetch_remote_tags(fake_runner, ["origin"], timeout=15)

        assert results == []
        assert fake_runner.calls == [("remote",)]
