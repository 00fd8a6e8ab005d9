"""Tests for the ccode command line"""
import json

import pytest
from click.testing import CliRunner

from ccode.cli.main import cli


@pytest.fixture
def run(profiles_path, router_path):
    runner = CliRunner()

    def _run(*args: str, **kwargs):
        return runner.invoke(
            cli,
            [
                "--profiles-path",
                str(profiles_path),
                "--router-config",
                str(router_path),
                *args,
            ],
            **kwargs,
        )

    return _run


class TestProfileCommands:
    def test_add_and_list(self, run):
        result = run(
            "profile",
            "add",
            "work",
            "--token",
            "sk-work-token",
            "--base-url",
            "https://api.anthropic.com",
        )
        assert result.exit_code == 0, result.output
        assert "set as default" in result.output

        result = run("profile", "list")
        assert result.exit_code == 0
        assert "* work" in result.output

    def test_list_empty(self, run):
        result = run("profile", "list")
        assert result.exit_code == 0
        assert "No direct profiles" in result.output

    def test_use_missing(self, run):
        result = run("profile", "use", "ghost")
        assert result.exit_code == 1
        assert "Error" in result.output
        assert "ghost" in result.output

    def test_show_masks_token(self, run):
        run(
            "profile",
            "add",
            "work",
            "--token",
            "sk-abcdefghijk",
            "--base-url",
            "https://api.anthropic.com",
        )
        result = run("profile", "show")
        assert result.exit_code == 0
        assert "sk-abcdefghijk" not in result.output
        assert "hijk" in result.output

    def test_env(self, run):
        run(
            "profile",
            "add",
            "work",
            "--token",
            "tok",
            "--base-url",
            "https://api.anthropic.com",
        )
        result = run("profile", "env", "work")
        assert result.exit_code == 0
        assert "export ANTHROPIC_AUTH_TOKEN=tok" in result.output
        assert "export ANTHROPIC_BASE_URL=https://api.anthropic.com" in (
            result.output
        )

    def test_remove_default_reassigns(self, run):
        for name in ("b", "a", "c"):
            run(
                "profile",
                "add",
                name,
                "--token",
                "tok",
                "--base-url",
                "https://x.test",
            )
        result = run("profile", "remove", "b", "--yes")
        assert result.exit_code == 0
        assert "default profile: a" in result.output


class TestProviderAndRouterCommands:
    def test_provider_router_flow(self, run, router_path):
        result = run("provider", "add", "ds", "--kind", "deepseek", "--api-key", "sk-ds")
        assert result.exit_code == 0, result.output

        result = run(
            "router",
            "add",
            "fast",
            "--default",
            "ds,deepseek-chat",
            "--think",
            "ds,deepseek-reasoner",
        )
        assert result.exit_code == 0, result.output

        result = run("router", "use", "fast")
        assert result.exit_code == 0, result.output

        doc = json.loads(router_path.read_text(encoding="utf-8"))
        assert doc["Router"]["default"] == "ds,deepseek-chat"
        assert doc["Router"]["think"] == "ds,deepseek-reasoner"
        assert doc["Providers"][0]["transformer"]["use"] == ["deepseek"]

        result = run("backup", "list")
        assert result.exit_code == 0
        assert "config_backup_" in result.output

    def test_router_add_warns_on_unknown_provider(self, run):
        result = run("router", "add", "fast", "--default", "ghost,m1")
        assert result.exit_code == 0
        assert "unknown provider 'ghost'" in result.output

    def test_router_use_dangling_fails(self, run, router_path):
        run("provider", "add", "ds", "--kind", "deepseek")
        run("router", "add", "fast", "--default", "ghost,m1")
        before = router_path.read_text(encoding="utf-8")

        result = run("router", "use", "fast")

        assert result.exit_code == 1
        assert "ghost" in result.output
        assert router_path.read_text(encoding="utf-8") == before

    def test_router_show_without_provider(self, run):
        result = run("router", "show")
        assert result.exit_code == 1
        assert "provider add" in result.output

    def test_provider_check(self, run):
        run("provider", "add", "ds", "--kind", "deepseek")
        result = run("provider", "check")
        assert result.exit_code == 1
        assert "unknown provider 'provider'" in result.output

    def test_provider_add_bad_kind_url(self, run):
        result = run(
            "provider",
            "add",
            "gem",
            "--kind",
            "gemini",
            "--url",
            "https://gem.test/v1/chat/completions",
        )
        assert result.exit_code == 1
        assert "Error" in result.output


class TestBackupCommands:
    def test_create_without_config(self, run):
        result = run("backup", "create")
        assert result.exit_code == 1
        assert "Nothing to back up" in result.output

    def test_list_empty(self, run):
        result = run("backup", "list")
        assert result.exit_code == 0
        assert "No backups" in result.output
