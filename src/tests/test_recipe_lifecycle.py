"""Tests for the recipe publication state machine.

These work on transient Recipe instances; no database is needed.
"""

import logging

import pytest

from src.models import Recipe, RecipeStatus
from src.services import recipe_lifecycle
from src.services.exceptions import InvalidStateError, RecipeStateError


def _recipe(status, recipe_id=1):
    return Recipe(id=recipe_id, title="Bread", servings=1, status=status)


class TestPublish:
    """Tests for publish()."""

    def test_publish_draft(self):
        recipe = recipe_lifecycle.publish(_recipe(RecipeStatus.DRAFT))
        assert recipe.status == RecipeStatus.PUBLISHED

    @pytest.mark.parametrize("status", [RecipeStatus.PUBLISHED, RecipeStatus.ARCHIVED])
    def test_publish_rejected_outside_draft(self, status):
        recipe = _recipe(status)

        with pytest.raises(RecipeStateError) as exc_info:
            recipe_lifecycle.publish(recipe)

        assert recipe.status == status
        assert exc_info.value.recipe_id == 1
        assert exc_info.value.current_state == status


class TestArchive:
    """Tests for archive()."""

    def test_archive_published(self):
        recipe = recipe_lifecycle.archive(_recipe(RecipeStatus.PUBLISHED))
        assert recipe.status == RecipeStatus.ARCHIVED

    @pytest.mark.parametrize("status", [RecipeStatus.DRAFT, RecipeStatus.ARCHIVED])
    def test_archive_rejected_outside_published(self, status):
        recipe = _recipe(status)

        with pytest.raises(InvalidStateError, match="must be in PUBLISHED state"):
            recipe_lifecycle.archive(recipe)

        assert recipe.status == status


class TestGuards:
    """Tests for ensure_editable(), ensure_deletable(), ensure_published(), is_visible()."""

    def test_only_drafts_are_editable(self):
        recipe_lifecycle.ensure_editable(_recipe(RecipeStatus.DRAFT))

        for status in (RecipeStatus.PUBLISHED, RecipeStatus.ARCHIVED):
            with pytest.raises(RecipeStateError, match="Cannot edit"):
                recipe_lifecycle.ensure_editable(_recipe(status))

    def test_published_is_not_deletable(self):
        recipe_lifecycle.ensure_deletable(_recipe(RecipeStatus.DRAFT))
        recipe_lifecycle.ensure_deletable(_recipe(RecipeStatus.ARCHIVED))

        with pytest.raises(RecipeStateError, match="Cannot delete"):
            recipe_lifecycle.ensure_deletable(_recipe(RecipeStatus.PUBLISHED))

    def test_ensure_published_names_operation(self):
        with pytest.raises(RecipeStateError) as exc_info:
            recipe_lifecycle.ensure_published(_recipe(RecipeStatus.DRAFT, recipe_id=7), "scale")

        message = str(exc_info.value)
        assert message.startswith("Cannot scale")
        assert "recipe 7 is draft" in message

    def test_is_visible(self):
        assert recipe_lifecycle.is_visible(_recipe(RecipeStatus.PUBLISHED))
        assert not recipe_lifecycle.is_visible(_recipe(RecipeStatus.DRAFT))
        assert not recipe_lifecycle.is_visible(_recipe(RecipeStatus.ARCHIVED))


class TestTransitionLogging:
    """Rejected transitions are logged before the error is raised."""

    def test_rejected_transition_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="recipe_box.services"):
            with pytest.raises(RecipeStateError):
                recipe_lifecycle.archive(_recipe(RecipeStatus.DRAFT, recipe_id=3))

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "archive: invalid_state"
        assert record.recipe_id == 3
        assert record.current_state == "draft"

    def test_allowed_transition_does_not_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="recipe_box.services"):
            recipe_lifecycle.publish(_recipe(RecipeStatus.DRAFT))

        assert caplog.records == []
