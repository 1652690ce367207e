"""Bootstrap an in-memory member graph and report who befriended whom."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from friendgraph.config import configure_logging, get_settings
from friendgraph.engine.graph import PropertyGraph
from friendgraph.errors import GraphBootstrapError
from friendgraph.graph.query import Direction, RelationshipQueryService
from friendgraph.pipeline import bootstrap

app = typer.Typer(help="Bootstrap a member graph from a schema document and query friendships")

DEFAULT_USERNAMES = ["Jill", "Bob", "Kate", "Jane", "Mike"]


def _settings(schema: Optional[Path], members_csv: Optional[Path], friendships_csv: Optional[Path]):
    overrides = {
        "schema_path": schema,
        "members_csv": members_csv,
        "friendships_csv": friendships_csv,
    }
    return get_settings().model_copy(update={k: v for k, v in overrides.items() if v is not None})


def _bootstrap_or_exit(graph: PropertyGraph, settings) -> None:
    try:
        report = bootstrap(graph, settings)
    except GraphBootstrapError as exc:
        typer.secho(f"Bootstrap failed ({type(exc).__name__}): {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if report.edges.skipped:
        typer.secho(f"Skipped {len(report.edges.skipped)} edges with unknown endpoints.", fg=typer.colors.YELLOW)
    load_ms = report.timings_ms.get("vertices", 0.0) + report.timings_ms.get("edges", 0.0)
    typer.secho(f"Sample data loaded, takes {load_ms:.2f} ms", fg=typer.colors.GREEN)
    typer.secho(
        f"Graph constructed with {report.total_vertices} vertices and {report.total_edges} edges.",
        fg=typer.colors.GREEN,
    )


@app.command()
def run(
    usernames: Optional[List[str]] = typer.Argument(None, help="Members to report on"),
    schema: Optional[Path] = typer.Option(None, help="Schema document (JSON)"),
    members_csv: Optional[Path] = typer.Option(None, help="Member records CSV"),
    friendships_csv: Optional[Path] = typer.Option(None, help="Friendship edges CSV"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Run the bootstrap workflow and print each member's incoming friendships."""
    settings = _settings(schema, members_csv, friendships_csv)
    configure_logging(verbose, settings.log_level)

    with PropertyGraph() as graph:
        _bootstrap_or_exit(graph, settings)
        service = RelationshipQueryService(graph, settings.vertex_label, settings.identity_property)
        for username in usernames or DEFAULT_USERNAMES:
            relations = service.member_relations(username)
            typer.echo(f"{username} has friendship:{relations.friends} count:{relations.friend_count}")
            typer.echo(f"{username} has pending_friendship:{relations.pending} count:{relations.pending_count}")


@app.command()
def query(
    match_value: str = typer.Argument(..., help="Value of the match property"),
    edge_label: str = typer.Option("friendship", help="Edge label to follow"),
    direction: Direction = typer.Option(Direction.INCOMING, help="Edge direction from the matched member"),
    match_property: str = typer.Option("username", help="Property used to match members"),
    project: str = typer.Option("username", help="Property projected from adjacent members"),
    schema: Optional[Path] = typer.Option(None, help="Schema document (JSON)"),
    members_csv: Optional[Path] = typer.Option(None, help="Member records CSV"),
    friendships_csv: Optional[Path] = typer.Option(None, help="Friendship edges CSV"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Run one adjacency query against a freshly bootstrapped graph."""
    settings = _settings(schema, members_csv, friendships_csv)
    configure_logging(verbose, settings.log_level)

    with PropertyGraph() as graph:
        _bootstrap_or_exit(graph, settings)
        service = RelationshipQueryService(graph, settings.vertex_label, settings.identity_property)
        try:
            results = service.find_adjacent(match_property, match_value, edge_label, direction, project)
        except GraphBootstrapError as exc:
            typer.secho(f"Query failed: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        typer.echo(f"{results} count:{len(results)}")


if __name__ == "__main__":  # pragma: no cover
    app()
