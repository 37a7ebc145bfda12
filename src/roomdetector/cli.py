"""Command Line Interface for Room Detector.

This module provides a simple CLI for detecting rooms in a wall JSON file
and inspecting the planar graph built from it.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import DEFAULT_CONFIG, load_config
from .engine.api import build_graph, detect_rooms_by_story_with_report, detect_rooms_with_report
from .geom.normalize import expand_walls
from .io.parser import load_walls, save_rooms

app = typer.Typer(
    name="room-detector",
    help="A CLI tool for detecting rooms from wall segments",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _rooms_table(rooms) -> Table:
    table = Table(title="Rooms")
    table.add_column("Room", style="cyan")
    table.add_column("Story", justify="center")
    table.add_column("Walls", style="green")
    table.add_column("Area (m²)", justify="right")
    table.add_column("Perimeter (m)", justify="right")

    for room in rooms:
        table.add_row(
            room.id,
            room.story_id or "-",
            ", ".join(room.walls),
            f"{room.area:.2f}",
            f"{room.perimeter:.2f}",
        )
    return table


@app.command()
def detect(
    walls: Path = typer.Option(..., "--walls", "-w", help="Path to walls JSON file"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config JSON file"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Path to output rooms JSON file"),
    by_story: bool = typer.Option(False, "--by-story", help="Detect rooms separately for each story"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """Detect the closed rooms enclosed by a set of walls."""
    _setup_logging(verbose)
    try:
        wall_list = load_walls(str(walls))
        console.print(f"[green]✓[/green] Loaded {len(wall_list)} walls from {walls}")

        detection_config = load_config(config) if config else DEFAULT_CONFIG

        detector = detect_rooms_by_story_with_report if by_story else detect_rooms_with_report
        report = detector(wall_list, detection_config)
        rooms = list(report.rooms)
        diagnostics = list(report.diagnostics)

        if rooms:
            console.print(_rooms_table(rooms))
        else:
            console.print("[yellow]No closed rooms found[/yellow]")

        total = sum(room.area for room in rooms)
        console.print(f"[blue]ℹ[/blue] {len(rooms)} rooms, total area {total:.2f} m²")

        if verbose and diagnostics:
            diag_table = Table(title="Diagnostics")
            diag_table.add_column("Kind", style="magenta")
            diag_table.add_column("Story", justify="center")
            diag_table.add_column("Subject", style="cyan")
            diag_table.add_column("Message")
            for d in diagnostics:
                diag_table.add_row(d.kind, d.story_id or "-", d.subject or "-", d.message)
            console.print(diag_table)

        if output:
            extra = {"diagnostics": [d.to_dict() for d in diagnostics]} if diagnostics else None
            save_rooms(rooms, str(output), extra)
            console.print(f"[green]✓[/green] Rooms saved to {output}")

    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def inspect(
    walls: Path = typer.Option(..., "--walls", "-w", help="Path to walls JSON file"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """Show the planar graph built from a set of walls."""
    _setup_logging(verbose)
    try:
        wall_list = load_walls(str(walls))
        detection_config = load_config(config) if config else DEFAULT_CONFIG
        segments, malformed = expand_walls(wall_list)
        graph = build_graph(wall_list, detection_config)

        table = Table(title="Wall graph")
        table.add_column("Item", style="cyan")
        table.add_column("Count", justify="right")
        table.add_row("Walls", str(len(wall_list)))
        table.add_row("Malformed walls", str(len(malformed)))
        table.add_row("Segments", str(len(segments)))
        table.add_row("Nodes", str(len(graph.nodes)))
        table.add_row("Edges", str(len(graph.edges)))
        table.add_row("Components", str(len(graph.components())))
        console.print(table)

        if verbose:
            node_table = Table(title="Nodes")
            node_table.add_column("Node", style="cyan")
            node_table.add_column("X", justify="right")
            node_table.add_column("Y", justify="right")
            node_table.add_column("Degree", justify="center")
            for node in graph.nodes.values():
                node_table.add_row(
                    node.id, f"{node.point.x:.3f}", f"{node.point.y:.3f}", str(graph.graph.degree(node.id))
                )
            console.print(node_table)

    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
