"""Pytest configuration and fixtures for service layer tests."""

import pytest
from sqlalchemy.orm import sessionmaker, scoped_session

from src.models.base import Base
from src.services.database import create_database_engine


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database (with the app's SQLite setup)
    2. Creates all tables
    3. Provides the scoped session to the test
    4. Drops all tables after the test completes
    """
    engine = create_database_engine("sqlite:///:memory:")

    # Import models so they're registered with Base
    import src.models  # noqa: F401

    Base.metadata.create_all(engine)

    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    # Monkey-patch the global session factory for tests
    import src.services.database as db_module

    original_get_session_factory = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    yield Session

    # Cleanup
    Session.remove()
    Base.metadata.drop_all(engine)
    engine.dispose()

    db_module.get_session_factory = original_get_session_factory


@pytest.fixture(scope="function")
def breakfast_category(test_db):
    """Provide a 'Breakfast' recipe category."""
    from src.services import recipe_category_service

    return recipe_category_service.create_category("Breakfast")


@pytest.fixture(scope="function")
def pancake_data():
    """Raw create input for a two-serving pancake recipe."""
    return {
        "title": "Pancakes",
        "description": "Fluffy weekend pancakes",
        "servings": 2,
        "ingredients": [
            {"name": "Flour", "quantity": 200, "unit": "g"},
            {"name": "Milk", "quantity": 300, "unit": "ml"},
            {"name": "Egg", "quantity": 2, "unit": "piece"},
        ],
        "steps": ["Whisk everything together", "Fry in a hot pan"],
    }


@pytest.fixture(scope="function")
def draft_recipe(test_db, pancake_data):
    """Provide a draft pancake recipe."""
    from src.services import recipe_service

    return recipe_service.create_recipe(pancake_data)


@pytest.fixture(scope="function")
def published_recipe(test_db, draft_recipe):
    """Provide a published pancake recipe."""
    from src.services import recipe_service

    return recipe_service.publish_recipe(draft_recipe.id)


@pytest.fixture(scope="function")
def make_published_recipe(test_db):
    """Factory fixture: create and publish a recipe from raw fields."""
    from src.services import recipe_service

    def _make(title, servings, ingredients, **fields):
        data = {"title": title, "servings": servings, "ingredients": ingredients, **fields}
        recipe = recipe_service.create_recipe(data)
        return recipe_service.publish_recipe(recipe.id)

    return _make


@pytest.fixture(scope="function")
def lock_database(test_db, monkeypatch):
    """Factory fixture: make the test session fail as if the SQLite file were locked.

    Call it after setting up data. By default every get, query and flush
    raises OperationalError; pass method names to fail only those.
    """
    from sqlalchemy.exc import OperationalError

    def _fail(*args, **kwargs):
        raise OperationalError("UPDATE recipes", {}, Exception("database is locked"))

    def _lock(*methods):
        session = test_db()
        for name in methods or ("get", "query", "flush"):
            monkeypatch.setattr(session, name, _fail)
        return session

    return _lock
