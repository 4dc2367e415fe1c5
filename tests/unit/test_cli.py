"""Unit tests for the curation CLI."""

import json
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from curation.cli.main import cli, load_snapshot


SNAPSHOT = """
items:
  - id: a
    title: Alpha
    is_published: true
    homepage_rank: 2
  - id: b
    title: Bravo
    language: hi
    is_published: true
    homepage_rank: 1
    is_banner: true
    banner_image_url: https://cdn.example.com/b.jpg
episode_counts:
  a: 2
  b: 1
"""

BROKEN_SNAPSHOT = """
items:
  - id: a
    title: Alpha
    is_published: true
    is_banner: true
episode_counts:
  a: 1
"""


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of CLI runs."""
    for name in ("ITEM_STORE_URL", "ITEM_STORE_API_KEY", "CURATION_CONFIG_PATH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def runner() -> CliRunner:
    """Click test runner."""
    return CliRunner()


def write(tmp_path: Path, name: str, content: str) -> Path:
    """Write a file under tmp_path."""
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadSnapshot:
    """Tests for load_snapshot."""

    @pytest.mark.asyncio
    async def test_builds_store(self, tmp_path: Path) -> None:
        """Items and counts are loaded into an in-memory store."""
        store = load_snapshot(write(tmp_path, "s.yaml", SNAPSHOT))

        assert [i.id for i in await store.list_items()] == ["b", "a"]
        assert await store.count_children("a") == 2

    @pytest.mark.parametrize(
        ("counts", "message"),
        [
            ("episode_counts:\n  a: many\n", "Invalid episode count"),
            ("episode_counts:\n  a: [1]\n", "Invalid episode count"),
            ("episode_counts:\n  - 3\n", "episode_counts must be a mapping"),
        ],
    )
    def test_bad_episode_counts(
        self, tmp_path: Path, counts: str, message: str
    ) -> None:
        """Unusable episode counts are reported as click errors."""
        path = write(tmp_path, "s.yaml", "items:\n  - id: a\n" + counts)

        with pytest.raises(click.ClickException, match=message):
            load_snapshot(path)

    def test_bad_episode_count_exits_cleanly(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        """The CLI prints the error instead of a traceback."""
        snapshot = write(tmp_path, "s.yaml", "items:\n  - id: a\nepisode_counts:\n  a: x\n")

        result = runner.invoke(cli, ["preview", "--snapshot", str(snapshot)])

        assert result.exit_code == 1
        assert "Invalid episode count" in result.output


class TestPreview:
    """Tests for the preview command."""

    def test_text_output(self, runner: CliRunner, tmp_path: Path) -> None:
        """Sections are listed with ranks and language labels."""
        snapshot = write(tmp_path, "s.yaml", SNAPSHOT)

        result = runner.invoke(cli, ["preview", "--snapshot", str(snapshot)])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[:5] == [
            "Banner (1/5)",
            "  Bravo [Hindi]",
            "Ranked (2/6)",
            "  #1 Bravo [Hindi]",
            "  #2 Alpha [English]",
        ]
        assert "New launches (0/8)" in lines

    def test_json_output(self, runner: CliRunner, tmp_path: Path) -> None:
        """JSON output carries section ids and states."""
        snapshot = write(tmp_path, "s.yaml", SNAPSHOT)

        result = runner.invoke(cli, ["preview", "--snapshot", str(snapshot), "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["sections"]["ranked"] == ["b", "a"]
        assert payload["states"] == {"a": "featured", "b": "featured"}

    def test_config_limits(self, runner: CliRunner, tmp_path: Path) -> None:
        """Section caps come from homepage.yaml."""
        snapshot = write(tmp_path, "s.yaml", SNAPSHOT)
        config = write(tmp_path, "homepage.yaml", "limits:\n  ranked_max: 1\n")

        result = runner.invoke(
            cli,
            ["preview", "--snapshot", str(snapshot), "--config", str(config), "--json"],
        )

        assert json.loads(result.stdout)["sections"]["ranked"] == ["b"]

    def test_no_store_configured(self, runner: CliRunner) -> None:
        """Without a snapshot or store URL the command fails with usage help."""
        result = runner.invoke(cli, ["preview"])

        assert result.exit_code == 2
        assert "ITEM_STORE_URL" in result.output

    def test_invalid_snapshot(self, runner: CliRunner, tmp_path: Path) -> None:
        """Invalid item records are reported."""
        snapshot = write(tmp_path, "s.yaml", "items:\n  - id: a\n    homepage_rank: -1\n")

        result = runner.invoke(cli, ["preview", "--snapshot", str(snapshot)])

        assert result.exit_code == 1
        assert "Invalid item in snapshot" in result.output


class TestCheck:
    """Tests for the check command."""

    def test_clean(self, runner: CliRunner, tmp_path: Path) -> None:
        """A clean snapshot passes."""
        snapshot = write(tmp_path, "s.yaml", SNAPSHOT)

        result = runner.invoke(cli, ["check", "--snapshot", str(snapshot)])

        assert result.exit_code == 0, result.output
        assert "No safety warnings." in result.output

    def test_errors_fail(self, runner: CliRunner, tmp_path: Path) -> None:
        """Error-severity warnings exit with status 1."""
        snapshot = write(tmp_path, "s.yaml", BROKEN_SNAPSHOT)

        result = runner.invoke(cli, ["check", "--snapshot", str(snapshot)])

        assert result.exit_code == 1
        assert "[ERROR] 1 story missing banner image" in result.output

    def test_json(self, runner: CliRunner, tmp_path: Path) -> None:
        """JSON output lists warnings and readiness."""
        snapshot = write(tmp_path, "s.yaml", BROKEN_SNAPSHOT)

        result = runner.invoke(cli, ["check", "--snapshot", str(snapshot), "--json"])

        payload = json.loads(result.stdout)
        assert result.exit_code == 1
        assert payload["warnings"][0]["kind"] == "banner_missing_image"
        assert payload["readiness"] == {"a": 75.0}


class TestValidate:
    """Tests for the validate command."""

    def test_valid(self, runner: CliRunner, tmp_path: Path) -> None:
        """Valid configuration prints a summary."""
        config = write(tmp_path, "homepage.yaml", "limits:\n  banner_max: 4\n")

        result = runner.invoke(cli, ["validate", "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert "Configuration is valid!" in result.output
        assert "banner=4" in result.output
        assert "Languages: en, hi, ta" in result.output

    def test_invalid(self, runner: CliRunner, tmp_path: Path) -> None:
        """Invalid configuration lists hinted errors."""
        config = write(tmp_path, "homepage.yaml", "limits:\n  banner_max: -1\n")

        result = runner.invoke(cli, ["validate", "--config", str(config)])

        assert result.exit_code == 1
        assert "Configuration validation failed:" in result.output
        assert "limits.banner_max" in result.output
