"""Tests for the approval gate entry point and its exit codes."""

import json
import logging

import httpx
import pytest
import respx
import structlog
from click.testing import CliRunner

from src.core.config import Config
from src.main import main, run

MEMBERS_URL = "https://api.github.com/orgs/my-org/teams/backend-devs/members"

APPROVAL_RULES = {
    "app/client/footer/": ["phil2195"],
    "app/client/": ["phil397"],
    "app/": ["team/backend-devs"],
}


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def inputs(tmp_path, monkeypatch):
    """Write the three input files and point the environment at them."""

    def write(changed_files: list[str], approved_reviewers: list[str], rules: dict | None = None):
        changed = tmp_path / "changed_files.txt"
        changed.write_text("\n".join(changed_files) + "\n", encoding="utf-8")
        reviewers = tmp_path / "approved_reviewers.txt"
        reviewers.write_text("\n".join(approved_reviewers) + "\n", encoding="utf-8")
        rules_path = tmp_path / "approval_rules.json"
        rules_path.write_text(json.dumps(APPROVAL_RULES if rules is None else rules), encoding="utf-8")

        monkeypatch.setenv("CHANGED_FILES_PATH", str(changed))
        monkeypatch.setenv("APPROVED_REVIEWERS_PATH", str(reviewers))
        monkeypatch.setenv("APPROVAL_RULES_PATH", str(rules_path))
        return tmp_path

    monkeypatch.setenv("GH_TOKEN", "fake-token")
    monkeypatch.setenv("GITHUB_REPOSITORY", "my-org/my-repo")
    monkeypatch.setenv("PR_NUMBER", "123")
    monkeypatch.delenv("GITHUB_API_URL", raising=False)
    monkeypatch.delenv("GITHUB_TEAM_MAX_PAGES", raising=False)
    return write


class TestRun:
    @pytest.mark.asyncio
    async def test_no_matching_rule_succeeds_without_remote_calls(self, inputs) -> None:
        inputs(["docs/readme.md"], [])

        async with respx.mock(assert_all_called=False) as mock:
            exit_code = await run(Config())

        assert exit_code == 0
        assert len(mock.calls) == 0

    @pytest.mark.asyncio
    async def test_all_owners_approved(self, inputs) -> None:
        inputs(["app/client/header/header.js"], ["Phil397", "dev_member"])

        async with respx.mock:
            route = respx.get(MEMBERS_URL).mock(
                return_value=httpx.Response(200, json=[{"login": "dev_member"}, {"login": "other_member"}])
            )
            exit_code = await run(Config())

        assert exit_code == 0
        assert route.call_count == 1
        assert route.calls.last.request.headers["Authorization"] == "token fake-token"

    @pytest.mark.asyncio
    async def test_missing_team_approval_fails(self, inputs) -> None:
        inputs(["app/client/header/header.js"], ["phil397"])

        async with respx.mock:
            respx.get(MEMBERS_URL).mock(return_value=httpx.Response(200, json=[{"login": "dev_member"}]))
            exit_code = await run(Config())

        assert exit_code == 1

    @pytest.mark.asyncio
    async def test_team_lookup_failure_fails(self, inputs) -> None:
        inputs(["app/server/main.py"], ["dev_member"])

        async with respx.mock:
            respx.get(MEMBERS_URL).mock(return_value=httpx.Response(403, json={"message": "Forbidden"}))
            exit_code = await run(Config())

        assert exit_code == 1

    @pytest.mark.asyncio
    async def test_user_owner_only(self, inputs) -> None:
        inputs(["lib/core.py"], ["alice"], rules={"lib/": ["Alice"]})

        assert await run(Config()) == 0

    @pytest.mark.asyncio
    async def test_missing_input_file_fails(self, inputs, monkeypatch, tmp_path) -> None:
        inputs(["app/x.js"], ["phil397"])
        monkeypatch.setenv("CHANGED_FILES_PATH", str(tmp_path / "missing.txt"))

        assert await run(Config()) == 1

    @pytest.mark.asyncio
    async def test_malformed_rules_fail(self, inputs, tmp_path) -> None:
        inputs(["app/x.js"], ["phil397"])
        (tmp_path / "approval_rules.json").write_text("{not json", encoding="utf-8")

        assert await run(Config()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["GH_TOKEN", "GITHUB_REPOSITORY", "PR_NUMBER"])
    async def test_missing_configuration_fails_before_reading_inputs(self, missing, monkeypatch) -> None:
        monkeypatch.setenv("GH_TOKEN", "fake-token")
        monkeypatch.setenv("GITHUB_REPOSITORY", "my-org/my-repo")
        monkeypatch.setenv("PR_NUMBER", "123")
        monkeypatch.delenv(missing)
        monkeypatch.setenv("CHANGED_FILES_PATH", "/nonexistent/changed_files.txt")

        assert await run(Config()) == 1


class TestCli:
    def test_cli_options_override_environment(self, inputs, tmp_path) -> None:
        inputs(["docs/readme.md"], [])
        changed = tmp_path / "other_changed.txt"
        changed.write_text("lib/core.py\n", encoding="utf-8")
        rules = tmp_path / "rules.yaml"
        rules.write_text("lib/:\n  - alice\n", encoding="utf-8")

        result = CliRunner().invoke(
            main,
            ["--changed-files", str(changed), "--approval-rules", str(rules), "--log-level", "DEBUG"],
        )

        # alice is required by lib/ but did not approve
        assert result.exit_code == 1

    def test_cli_exit_zero_when_nothing_required(self, inputs) -> None:
        inputs(["docs/readme.md"], [])

        result = CliRunner().invoke(main, [])

        assert result.exit_code == 0

    def test_cli_exit_one_on_malformed_repository(self, inputs, monkeypatch) -> None:
        inputs(["docs/readme.md"], [])
        monkeypatch.setenv("GITHUB_REPOSITORY", "not-a-repo")

        result = CliRunner().invoke(main, [])

        assert result.exit_code == 1
