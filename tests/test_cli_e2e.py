"""End-to-end CLI tests using typer.testing.CliRunner."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from yaga.cli import app

runner = CliRunner()

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PROFILE_FEED = str(FIXTURES_DIR / "profile_feed.yaml")


@pytest.fixture
def config_file(tmp_path):
    """Config pointing the file cache at a temp dir."""
    path = tmp_path / "config.yaml"
    path.write_text(
        f"Yaga.Cache.Dir: {tmp_path / 'cache'}\n"
        "Yaga:\n"
        "  Reactions:\n"
        "    Enabled: true\n",
        encoding="utf-8",
    )
    return str(path)


class TestHelp:
    def test_root_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "rules" in result.output
        assert "feed" in result.output
        assert "cache" in result.output

    def test_rules_help(self):
        result = runner.invoke(app, ["rules", "--help"])
        assert result.exit_code == 0
        assert "list" in result.output
        assert "form" in result.output


class TestRulesList:
    def test_plain(self, config_file):
        result = runner.invoke(app, ["rules", "list", "--config", config_file, "--plain"])
        assert result.exit_code == 0
        assert "PostCount" in result.output
        assert "Manual" in result.output

    def test_json_sorted(self, config_file):
        result = runner.invoke(app, ["rules", "list", "--config", config_file, "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        names = [r["name"] for r in data["rules"]]
        assert names == sorted(names)

    def test_interactive(self, config_file):
        result = runner.invoke(
            app, ["rules", "list", "--interactive", "--config", config_file, "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert {r["rule_class"] for r in data["rules"]} == {
            "ReactionCount",
            "PostReactions",
            "NewbieComment",
        }
        assert data["title"] == "Interactive Rules"

    def test_writes_file_cache(self, config_file, tmp_path):
        runner.invoke(app, ["rules", "list", "--config", config_file, "--json"])
        assert list((tmp_path / "cache").glob("*.json"))

    def test_no_cache(self, config_file, tmp_path):
        result = runner.invoke(
            app, ["rules", "list", "--no-cache", "--config", config_file, "--json"]
        )
        assert result.exit_code == 0
        assert not list((tmp_path / "cache").glob("*.json"))

    def test_bad_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- not\n- a mapping\n", encoding="utf-8")
        result = runner.invoke(app, ["rules", "list", "--config", str(path)])
        assert result.exit_code == 2

    def test_non_numeric_cache_expire(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            f"Yaga.Cache.Dir: {tmp_path / 'cache'}\n"
            "Yaga.Rules.CacheExpire: daily\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["rules", "list", "--config", str(path)])
        assert result.exit_code == 1


class TestRulesForm:
    def test_valid_rule(self, config_file):
        result = runner.invoke(
            app, ["rules", "form", "LengthOfService", "--config", config_file, "--plain"]
        )
        assert result.exit_code == 0
        assert "Length of Service" in result.output
        assert "Duration" in result.output

    def test_json(self, config_file):
        result = runner.invoke(
            app, ["rules", "form", "ManualAward", "--config", config_file, "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["name"] == "Manual"

    def test_unknown_rule(self, config_file):
        result = runner.invoke(app, ["rules", "form", "NoSuchRule", "--config", config_file])
        assert result.exit_code == 1
        assert "Rule not found" in result.output


class TestFeed:
    def test_plain(self, config_file):
        result = runner.invoke(app, ["feed", PROFILE_FEED, "--config", config_file, "--plain"])
        assert result.exit_code == 0
        assert "Welcome to the forum" in result.output
        assert "Reactions: Like x5" in result.output

    def test_guest_hides_reactions(self, config_file):
        result = runner.invoke(
            app, ["feed", PROFILE_FEED, "--guest", "--config", config_file, "--plain"]
        )
        assert result.exit_code == 0
        assert "Reactions:" not in result.output

    def test_json(self, config_file):
        result = runner.invoke(app, ["feed", PROFILE_FEED, "--config", config_file, "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["item_count"] == 2

    def test_missing_file(self, config_file):
        result = runner.invoke(app, ["feed", "nonexistent.yaml", "--config", config_file])
        assert result.exit_code != 0
        assert "not found" in result.output.lower() or "error" in result.output.lower()

    def test_invalid_rows(self, config_file, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- ItemType: Comment\n", encoding="utf-8")
        result = runner.invoke(app, ["feed", str(path), "--config", config_file])
        assert result.exit_code != 0


class TestConfigAndCache:
    def test_config_show(self, config_file):
        result = runner.invoke(app, ["config", "show", "--config", config_file])
        assert result.exit_code == 0
        assert "Yaga.Cache.Dir" in result.output

    def test_config_show_empty(self, tmp_path):
        result = runner.invoke(app, ["config", "show", "--config", str(tmp_path / "none.yaml")])
        assert result.exit_code == 0
        assert "No configuration set." in result.output

    def test_cache_clear(self, config_file, tmp_path):
        runner.invoke(app, ["rules", "list", "--config", config_file, "--json"])
        result = runner.invoke(app, ["cache", "clear", "--config", config_file])
        assert result.exit_code == 0
        assert "cleared" in result.output
        assert not list((tmp_path / "cache").glob("*.json"))
