#!/usr/bin/env python3

"""Command line entry point for flatport."""

import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from flatport.config import PreprocessConfig
from flatport.console import Console
from flatport.errors import PreprocessError
from flatport.pipeline import PreprocessResult, preprocess


def print_order(console: Console, result: PreprocessResult):
    """Print the resolved function order."""
    by_identity = {element.identity: element for element in result.elements}

    table = Table(title="Function order")
    table.add_column("#", justify="right")
    table.add_column("Identity")
    table.add_column("Name")
    table.add_column("Line", justify="right")
    for i, identity in enumerate(result.order, 1):
        element = by_identity[identity]
        table.add_row(str(i), identity, element.name or "-", str(element.origin_line + 1))
    console.print(table)


def load_config(
    config_file: str | None,
    input_file: str | None,
    output_file: str | None,
    include_dirs: tuple[str, ...],
) -> PreprocessConfig:
    if config_file:
        config = PreprocessConfig.load_from_file(Path(config_file))
    else:
        config = PreprocessConfig.find_config(Path.cwd()) or PreprocessConfig()

    update = {}
    if input_file:
        update["input_file"] = Path(input_file)
    if output_file:
        update["output_file"] = Path(output_file)
    if include_dirs:
        update["include_dirs"] = [*config.include_dirs, *(Path(d) for d in include_dirs)]
    return config.model_copy(update=update)


@click.command()
@click.option("--input", "input_file", help="C file to preprocess (default: main.c)")
@click.option("--output", "output_file", help="Output file (default: preprocessed_main.c)")
@click.option(
    "--include-dir",
    "include_dirs",
    multiple=True,
    type=click.Path(file_okay=False),
    help="Extra directory searched for quoted includes (can be specified multiple times)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a flatport_config.json file",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the result instead of writing it")
@click.option("--show-order", is_flag=True, help="Print the resolved function order")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(
    input_file: str | None,
    output_file: str | None,
    include_dirs: tuple[str, ...],
    config_file: str | None,
    to_stdout: bool,
    show_order: bool,
    verbose: bool,
):
    """Inline includes, reorder functions and convert #defines for a Rust port."""
    console = Console()
    console.setup_logging(verbose)

    try:
        config = load_config(config_file, input_file, output_file, include_dirs)
        result = preprocess(config, write=not to_stdout)
    except (json.JSONDecodeError, ValidationError) as e:
        console.error(f"Invalid configuration: {escape(str(e))}")
        sys.exit(1)
    except PreprocessError as e:
        console.error(f"Error during preprocessing: {escape(str(e))}")
        sys.exit(1)

    if show_order:
        print_order(console, result)

    if to_stdout:
        click.echo(result.output.render(), nl=False)
    else:
        console.print(
            f"Preprocessing complete. Output: {escape(str(result.output_file))}", soft_wrap=True
        )


if __name__ == "__main__":
    main()
