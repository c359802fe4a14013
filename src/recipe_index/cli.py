#!/usr/bin/env python3
"""CLI for recipe-index: extract recipes from saved pages and extracted text.

The CLI is responsible for:
- Argument parsing
- Rich display of recipes and shopping lists
- Error presentation
- Calling the orchestrator and consolidator for business logic

Fetching pages, OCR and PDF text extraction happen elsewhere; the CLI reads
their output from files.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from .config import ExtractionConfig
from .consolidator import ParsedIngredient, format_quantity
from .exceptions import ConfigurationError
from .models import Recipe, RecipeSource
from .pipeline import ImportResult
from .services import ServiceFactory

console = Console()


def setup_logging(log_file: str = "recipe_index.log", debug: bool = False) -> None:
    """Set up logging configuration for the application.

    Detailed logs go to a file only; console output is handled by Rich.

    Args:
        log_file: Path to the log file. Defaults to "recipe_index.log".
        debug: Log at DEBUG instead of INFO
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.FileHandler(log_file, mode="w")],
    )


def create_progress() -> Progress:
    """Create a Rich progress bar with standard configuration."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Extract structured recipes from saved web pages, PDF text and OCR text",
        prog="recipe-index",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to a TOML config file")
    parser.add_argument("--debug", action="store_true", help="Write debug output to the log")

    subparsers = parser.add_subparsers(dest="command", required=True)

    html_parser = subparsers.add_parser("html", help="Import a saved HTML page")
    html_parser.add_argument("path", type=str, help="Path to the HTML file")
    html_parser.add_argument("--url", type=str, required=True, help="URL the page came from")
    html_parser.add_argument("--output", type=str, default=None, help="Write recipe JSON here")

    text_parser = subparsers.add_parser("text", help="Import text extracted from a PDF or photo")
    text_parser.add_argument("path", type=str, help="Path to the text file")
    text_parser.add_argument(
        "--source",
        type=str,
        default="pdf",
        choices=["pdf", "photo"],
        help="Where the text came from (default: pdf)",
    )
    text_parser.add_argument("--output", type=str, default=None, help="Write recipe JSON here")

    photos_parser = subparsers.add_parser("photos", help="Import OCR text of several photos")
    photos_parser.add_argument("paths", nargs="+", type=str, help="One text file per photo")
    photos_parser.add_argument("--output", type=str, default=None, help="Write recipe JSON here")

    consolidate_parser = subparsers.add_parser(
        "consolidate", help="Merge ingredients of saved recipes into a shopping list"
    )
    consolidate_parser.add_argument("paths", nargs="+", type=str, help="Recipe JSON files")

    return parser.parse_args(argv)


def display_recipe(result: ImportResult) -> None:
    """Display an imported recipe."""
    recipe = result.recipe
    if recipe is None:
        return

    details = [f"[bold cyan]{recipe.title}[/bold cyan]"]
    if recipe.description:
        details.append(f"[dim]{recipe.description}[/dim]")
    details.append(f"Servings: {recipe.servings}")
    for label, minutes in (
        ("Prep", recipe.prep_time_minutes),
        ("Cook", recipe.cook_time_minutes),
        ("Total", recipe.total_time_minutes),
    ):
        if minutes:
            details.append(f"{label}: {minutes} min")
    if recipe.cuisine:
        details.append(f"Cuisine: {recipe.cuisine}")
    if recipe.tags:
        details.append(f"Tags: {', '.join(recipe.tags)}")
    if result.tiers_used:
        details.append(f"[dim]Tiers: {', '.join(result.tiers_used)}[/dim]")

    console.print()
    console.print(
        Panel.fit(
            "\n".join(details),
            title=f"[bold]{recipe.source.value} import[/bold]",
            border_style="cyan",
        )
    )

    ingredients = Table(title="Ingredients", show_header=False, header_style="bold cyan")
    ingredients.add_column("Ingredient", style="green")
    for line in recipe.ingredients:
        ingredients.add_row(line)
    console.print(ingredients)

    steps = Table(title="Instructions", show_header=False)
    steps.add_column("#", style="cyan", justify="right")
    steps.add_column("Step")
    for i, step in enumerate(recipe.instructions, 1):
        steps.add_row(str(i), step)
    console.print(steps)

    if result.image_urls:
        console.print(f"[bold]Images:[/bold] {len(result.image_urls)} found")
    console.print()


def display_shopping_list(items: list[ParsedIngredient]) -> None:
    """Display a consolidated shopping list."""
    table = Table(
        title="[bold green]Shopping List[/bold green]",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Quantity", justify="right")
    table.add_column("Unit", style="cyan")
    table.add_column("Item", style="green")
    table.add_column("Notes", style="dim")
    table.add_column("Recipes", justify="right")

    for item in items:
        table.add_row(
            format_quantity(item.quantity) if item.quantity is not None else "",
            item.unit or "",
            item.name,
            item.notes or "",
            str(len(item.recipe_ids)),
        )

    console.print()
    console.print(table)
    console.print()


def display_error(title: str, message: str) -> None:
    """Display an error panel."""
    console.print()
    console.print(
        Panel(
            message,
            title=f"[bold red]{title}[/bold red]",
            border_style="red",
        )
    )
    console.print()


def read_text(path: str) -> str:
    """Read a UTF-8 input file, raising SystemExit with a panel if missing."""
    file_path = Path(path)
    if not file_path.exists():
        display_error(
            "Error",
            f"[bold red]File not found:[/bold red]\n{path}\n\n"
            f"[dim]Please check the file path and try again.[/dim]",
        )
        raise SystemExit(1)
    return file_path.read_text(encoding="utf-8", errors="replace")


def write_recipe(recipe: Recipe, output: str) -> None:
    """Write a recipe as JSON."""
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(recipe.model_dump_json(indent=2), encoding="utf-8")
    console.print(f"[green]✓[/green] Wrote recipe to [cyan]{path}[/cyan]")


def run_import(args: argparse.Namespace, factory: ServiceFactory) -> int:
    """Run the html, text or photos command."""
    orchestrator = factory.orchestrator

    if args.command == "html":
        result = orchestrator.import_html(read_text(args.path), args.url)
    elif args.command == "text":
        source = RecipeSource.PHOTO if args.source == "photo" else RecipeSource.PDF
        result = orchestrator.import_text(read_text(args.path), source, args.path)
    else:
        texts = [read_text(path) for path in args.paths]
        identifier = args.paths[0] if len(args.paths) == 1 else None
        result = orchestrator.import_photos(texts, identifier)

    if not result.is_success or result.recipe is None:
        display_error("Import Failed", result.error or "Unknown error")
        return 1

    display_recipe(result)
    problem = factory.create_validator().validation_error(result.recipe)
    if problem:
        console.print(f"[yellow]⚠[/yellow] Review before saving: {problem}")

    if args.output:
        write_recipe(result.recipe, args.output)
    return 0


def run_consolidate(args: argparse.Namespace, factory: ServiceFactory) -> int:
    """Run the consolidate command."""
    recipes: list[Recipe] = []
    with create_progress() as progress:
        task = progress.add_task("Loading recipes", total=len(args.paths))
        for path in args.paths:
            try:
                recipes.append(Recipe.model_validate_json(read_text(path)))
            except PydanticValidationError as e:
                logging.warning(f"Invalid recipe file {path}: {e}")
                display_error("Invalid Recipe", f"{path}\n\n[dim]{e.error_count()} errors[/dim]")
                return 1
            progress.advance(task)

    items = factory.create_consolidator().consolidate(
        (recipe.ingredients, recipe.id) for recipe in recipes
    )
    display_shopping_list(items)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the recipe-index CLI command."""
    args = parse_args(argv)

    try:
        config = ExtractionConfig.load(args.config)
        if args.debug:
            config.update(debug_mode=True)
    except ConfigurationError as e:
        display_error("Configuration Error", str(e))
        raise SystemExit(1) from e

    setup_logging(config.log_file, debug=config.debug_mode)
    factory = ServiceFactory(config=config)

    try:
        if args.command == "consolidate":
            exit_code = run_consolidate(args, factory)
        else:
            exit_code = run_import(args, factory)
    except KeyboardInterrupt:
        console.print()
        console.print(
            Panel(
                "[yellow]Interrupted by user[/yellow]",
                title="[bold yellow]Interrupted[/bold yellow]",
                border_style="yellow",
            )
        )
        exit_code = 130
    except Exception as e:  # Intentional catch-all for CLI entry point
        display_error(
            "Error",
            f"[bold red]An unexpected error occurred:[/bold red]\n\n{e!s}\n\n"
            f"[dim]Check {config.log_file} for detailed error information.[/dim]",
        )
        logging.exception("Unexpected error during processing")
        raise

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
