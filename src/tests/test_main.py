"""Tests for the command-line interface."""

import json

import pytest

import src.main as cli
from src.services import recipe_service
from src.utils.config import reset_config
from src.utils.constants import APP_VERSION


@pytest.fixture
def cli_db(test_db, monkeypatch):
    """Run CLI commands against the test database."""
    monkeypatch.setattr(cli, "initialize_app_database", lambda: None)
    monkeypatch.setattr(cli, "close_connections", lambda: None)
    return test_db


class TestCommands:
    """Tests for main() subcommands."""

    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 1
        assert "usage: recipe-box" in capsys.readouterr().out

    def test_create_from_json(self, cli_db, tmp_path, pancake_data, capsys):
        path = tmp_path / "pancakes.json"
        path.write_text(json.dumps(pancake_data), encoding="utf-8")

        assert cli.main(["create", str(path)]) == 0

        assert "Created draft recipe 1: Pancakes" in capsys.readouterr().out

    def test_create_unreadable_file(self, cli_db, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        assert cli.main(["create", str(path)]) == 1
        assert "ERROR: Cannot read" in capsys.readouterr().out

    def test_create_invalid_recipe(self, cli_db, tmp_path, capsys):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"title": "Nothing", "servings": 1}), encoding="utf-8")

        assert cli.main(["create", str(path)]) == 1
        assert "At least one ingredient is required" in capsys.readouterr().out

    def test_publish_list_and_show(self, cli_db, draft_recipe, capsys):
        assert cli.main(["publish", str(draft_recipe.id)]) == 0
        assert cli.main(["list", "--search", "flour"]) == 0
        assert cli.main(["show", str(draft_recipe.id)]) == 0

        out = capsys.readouterr().out
        assert f"Recipe {draft_recipe.id} is now published" in out
        assert f"[{draft_recipe.id}] Pancakes (2 servings, -)" in out
        assert "200 g Flour" in out
        assert "1. Whisk everything together" in out

    def test_list_empty(self, cli_db, capsys):
        assert cli.main(["list"]) == 0
        assert "No published recipes found." in capsys.readouterr().out

    def test_scale(self, cli_db, published_recipe, capsys):
        assert cli.main(["scale", str(published_recipe.id), "3"]) == 0

        out = capsys.readouterr().out
        assert "Pancakes: 3 servings (x1.5)" in out
        assert "300 g Flour" in out
        assert "450 ml Milk" in out

    def test_shopping_list(self, cli_db, published_recipe, make_published_recipe, capsys):
        crepes = make_published_recipe(
            "Crepes", 4, [{"name": "Flour", "quantity": 125, "unit": "g"}]
        )

        assert cli.main(["shopping-list", str(published_recipe.id), str(crepes.id)]) == 0

        out = capsys.readouterr().out
        assert "325 g Flour" in out
        assert "300 ml Milk" in out

    def test_service_error_exit_code(self, cli_db, draft_recipe, capsys):
        assert cli.main(["archive", str(draft_recipe.id)]) == 1
        assert "ERROR: Cannot archive" in capsys.readouterr().out

    def test_archive_then_delete(self, cli_db, published_recipe, capsys):
        assert cli.main(["archive", str(published_recipe.id)]) == 0
        assert cli.main(["delete", str(published_recipe.id)]) == 0

        assert f"Recipe {published_recipe.id} deleted" in capsys.readouterr().out
        assert recipe_service.list_recipes() == []

    def test_missing_recipe(self, cli_db, capsys):
        assert cli.main(["show", "42"]) == 1
        assert "Recipe with ID 42 not found" in capsys.readouterr().out

    def test_database_failure_exit_code(self, cli_db, published_recipe, lock_database, capsys):
        lock_database()

        assert cli.main(["archive", str(published_recipe.id)]) == 1
        assert "ERROR: Database error: Failed to archive recipe" in capsys.readouterr().out


class TestLifecycle:
    """Tests for setup and teardown around commands."""

    def test_connections_closed_after_success(self, cli_db, monkeypatch):
        calls = []
        monkeypatch.setattr(cli, "close_connections", lambda: calls.append("closed"))

        assert cli.main(["list"]) == 0
        assert calls == ["closed"]

    def test_connections_closed_after_error(self, cli_db, monkeypatch):
        calls = []
        monkeypatch.setattr(cli, "close_connections", lambda: calls.append("closed"))

        assert cli.main(["show", "7"]) == 1
        assert calls == ["closed"]

    def test_init_db_reports_version(self, monkeypatch, capsys):
        monkeypatch.setenv("RECIPE_BOX_ENV", "development")
        monkeypatch.setenv("RECIPE_BOX_DATABASE_URL", "sqlite:///:memory:")
        monkeypatch.setattr(cli, "initialize_app_database", lambda: None)
        monkeypatch.setattr(cli, "close_connections", lambda: None)
        reset_config()
        try:
            assert cli.main(["init-db"]) == 0
        finally:
            reset_config()

        out = capsys.readouterr().out
        assert f"Recipe Box {APP_VERSION}" in out
        assert "Initializing database (development)" in out
        assert "Database ready: sqlite:///:memory:" in out
