"""
Main entry point for the Recipe Box application.

Command-line interface over the recipe services. Output is plain text,
meant for scripting and quick inspection rather than a full UI.

Usage Examples:
    # Create the database tables
    python run.py init-db

    # Create a draft recipe from a JSON file, then publish it
    python run.py create pancakes.json
    python run.py publish 1

    # List published recipes, optionally filtered
    python run.py list --category-name Breakfast --search flour

    # Scale a recipe to 6 servings
    python run.py scale 1 6

    # Shopping list for several recipes
    python run.py shopping-list 1 2 3
"""

import argparse
import json
import logging
import os
import sys

from src.services import recipe_service
from src.services.database import close_connections, initialize_app_database
from src.services.exceptions import ServiceError
from src.utils.config import get_config
from src.utils.constants import ENV_VAR_LOG_LEVEL
from src.utils.datetime_utils import format_timestamp


def configure_logging() -> None:
    """Configure root logging from RECIPE_BOX_LOG_LEVEL (default WARNING)."""
    level_name = os.environ.get(ENV_VAR_LOG_LEVEL, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _format_quantity(value: float) -> str:
    return f"{value:g}"


def _print_recipe(recipe) -> None:
    category = recipe.category.name if recipe.category else "-"
    print(f"[{recipe.id}] {recipe.title} ({_format_quantity(recipe.servings)} servings)")
    print(f"  Category: {category}")
    print(f"  Status: {recipe.status.value}")
    print(f"  Updated: {format_timestamp(recipe.updated_at)}")
    if recipe.description:
        print(f"  {recipe.description}")
    print("  Ingredients:")
    for ri in recipe.recipe_ingredients:
        print(f"    - {_format_quantity(ri.quantity)} {ri.unit} {ri.ingredient.name}")
    if recipe.steps:
        print("  Steps:")
        for index, step in enumerate(recipe.steps, start=1):
            print(f"    {index}. {step}")


def init_db_cmd() -> int:
    """Create database tables."""
    config = get_config()
    print(f"{config.app_name} {config.app_version}")
    print(f"Initializing database ({config.environment})...")
    initialize_app_database()
    print(f"Database ready: {config.database_url}")
    return 0


def create_cmd(input_file: str) -> int:
    """Create a draft recipe from a JSON file."""
    try:
        with open(input_file, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: Cannot read {input_file}: {e}")
        return 1

    recipe = recipe_service.create_recipe(data)
    print(f"Created draft recipe {recipe.id}: {recipe.title}")
    return 0


def list_cmd(category_name=None, search=None) -> int:
    """List published recipes."""
    recipes = recipe_service.list_recipes(category_name=category_name, search=search)
    if not recipes:
        print("No published recipes found.")
        return 0

    for recipe in recipes:
        category = recipe.category.name if recipe.category else "-"
        print(
            f"[{recipe.id}] {recipe.title} "
            f"({_format_quantity(recipe.servings)} servings, {category})"
        )
    return 0


def show_cmd(recipe_id: int) -> int:
    """Show one published recipe."""
    _print_recipe(recipe_service.get_recipe(recipe_id))
    return 0


def publish_cmd(recipe_id: int) -> int:
    """Publish a draft recipe."""
    recipe = recipe_service.publish_recipe(recipe_id)
    print(f"Recipe {recipe.id} is now {recipe.status.value}")
    return 0


def archive_cmd(recipe_id: int) -> int:
    """Archive a published recipe."""
    recipe = recipe_service.archive_recipe(recipe_id)
    print(f"Recipe {recipe.id} is now {recipe.status.value}")
    return 0


def delete_cmd(recipe_id: int) -> int:
    """Delete a draft or archived recipe."""
    recipe_service.delete_recipe(recipe_id)
    print(f"Recipe {recipe_id} deleted")
    return 0


def scale_cmd(recipe_id: int, servings: str) -> int:
    """Print a recipe's ingredients scaled to a serving count."""
    scaled = recipe_service.scale_recipe(recipe_id, servings)
    print(
        f"{scaled.title}: {_format_quantity(scaled.servings)} servings "
        f"(x{_format_quantity(scaled.factor)})"
    )
    for line in scaled.ingredients:
        print(f"  - {_format_quantity(line.quantity)} {line.unit} {line.ingredient_name}")
    return 0


def shopping_list_cmd(recipe_ids) -> int:
    """Print the combined shopping list for several recipes."""
    items = recipe_service.generate_shopping_list(recipe_ids)
    print("Shopping list")
    print("-------------")
    for item in items.values():
        print(f"  {_format_quantity(item.quantity)} {item.unit} {item.ingredient_name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recipe-box",
        description="Recipe Box - manage, scale and shop for recipes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Create and publish a recipe:
    recipe-box create pancakes.json
    recipe-box publish 1

  Scale to 6 servings:
    recipe-box scale 1 6

  Shopping list for two recipes:
    recipe-box shopping-list 1 2
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("init-db", help="Create database tables")

    create_parser = subparsers.add_parser("create", help="Create a draft recipe from JSON")
    create_parser.add_argument("file", help="JSON file with title, servings, ingredients, ...")

    list_parser = subparsers.add_parser("list", help="List published recipes")
    list_parser.add_argument("--category-name", dest="category_name", help="Exact category name")
    list_parser.add_argument("--search", help="Text matched in title, description or ingredients")

    for command, help_text in [
        ("show", "Show a published recipe"),
        ("publish", "Publish a draft recipe"),
        ("archive", "Archive a published recipe"),
        ("delete", "Delete a draft or archived recipe"),
    ]:
        command_parser = subparsers.add_parser(command, help=help_text)
        command_parser.add_argument("recipe_id", type=int, help="Recipe ID")

    scale_parser = subparsers.add_parser("scale", help="Scale a recipe to a serving count")
    scale_parser.add_argument("recipe_id", type=int, help="Recipe ID")
    scale_parser.add_argument("servings", help="Target servings")

    shopping_parser = subparsers.add_parser("shopping-list", help="Combined shopping list")
    shopping_parser.add_argument("recipe_ids", type=int, nargs="+", help="Recipe IDs")

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging()

    try:
        if args.command == "init-db":
            return init_db_cmd()

        initialize_app_database()

        if args.command == "create":
            return create_cmd(args.file)
        elif args.command == "list":
            return list_cmd(category_name=args.category_name, search=args.search)
        elif args.command == "show":
            return show_cmd(args.recipe_id)
        elif args.command == "publish":
            return publish_cmd(args.recipe_id)
        elif args.command == "archive":
            return archive_cmd(args.recipe_id)
        elif args.command == "delete":
            return delete_cmd(args.recipe_id)
        elif args.command == "scale":
            return scale_cmd(args.recipe_id, args.servings)
        elif args.command == "shopping-list":
            return shopping_list_cmd(args.recipe_ids)
        else:
            print(f"Unknown command: {args.command}")
            return 1

    except ServiceError as e:
        print(f"ERROR: {e}")
        return 1

    finally:
        close_connections()


if __name__ == "__main__":
    sys.exit(main())
