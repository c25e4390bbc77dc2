"""Command-line interface for the JSON graph engine."""

import json
import logging
import sys
import click
from pathlib import Path
from typing import Optional
from . import __version__
from .config import EngineConfig
from .engine import JSONGraphEngine
from .models import GraphBuildResult
from .parser import JSONParser


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _load_config(config_file: Optional[Path], max_depth: Optional[int]) -> EngineConfig:
    data = {}
    if config_file is not None:
        data = json.loads(config_file.read_text(encoding='utf-8'))
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a JSON object, got {type(data).__name__}")
    if max_depth is not None:
        data["maxDepth"] = max_depth
    return EngineConfig.from_dict(data)


def _emit(text: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(text, encoding='utf-8')
        click.echo(f"✅ Wrote {output}", err=True)
    else:
        click.echo(text)


@click.group()
@click.version_option(version=__version__)
def main():
    """JSON Graph - Convert between JSON documents and editable node graphs."""
    pass


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output graph file (default: stdout)')
@click.option('--layout/--no-layout', default=True, help='Run the hierarchical layout (default: on)')
@click.option('--max-depth', type=click.IntRange(min=1), help='Depth guard (default: 50)')
@click.option('--config', 'config_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='JSON file with engine options')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def build(input_file: Path, output: Optional[Path], layout: bool, max_depth: Optional[int],
          config_file: Optional[Path], verbose: bool):
    """Build a node graph from a JSON file."""
    _configure_logging(verbose)

    try:
        config = _load_config(config_file, max_depth)
        engine = JSONGraphEngine(config)
        data = JSONParser(engine.error_handler).parse(input_file.read_text(encoding='utf-8'))
    except (ValueError, TypeError, OSError) as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    result = engine.build_and_layout(data) if layout else engine.build(data)
    for warning in result.warnings:
        click.echo(f"   • {warning}", err=True)

    click.echo(f"📊 {len(result.nodes)} nodes, {len(result.edges)} edges", err=True)
    _emit(json.dumps(result.to_dict(), indent=2, ensure_ascii=False), output)


@main.command()
@click.argument('graph_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output JSON file (default: stdout)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def reconstruct(graph_file: Path, output: Optional[Path], verbose: bool):
    """Rebuild a JSON document from a graph file."""
    _configure_logging(verbose)

    try:
        graph = GraphBuildResult.from_dict(json.loads(graph_file.read_text(encoding='utf-8')))
    except (ValueError, KeyError, TypeError, OSError) as e:
        click.echo(f"❌ Error: invalid graph file: {e}", err=True)
        sys.exit(1)

    report = JSONGraphEngine().reconstruct_with_report(graph.nodes, graph.edges)
    for warning in report.warnings:
        click.echo(f"   • {warning}", err=True)

    _emit(json.dumps(report.value, indent=2, ensure_ascii=False), output)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--max-depth', type=click.IntRange(min=1), help='Depth guard (default: 50)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def roundtrip(input_file: Path, max_depth: Optional[int], verbose: bool):
    """Check that a JSON file survives build and reconstruct unchanged."""
    _configure_logging(verbose)

    try:
        engine = JSONGraphEngine(_load_config(None, max_depth))
        data = JSONParser(engine.error_handler).parse(input_file.read_text(encoding='utf-8'))
    except (ValueError, TypeError, OSError) as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    result = engine.build(data)
    rebuilt = engine.reconstruct(result.nodes, result.edges)

    if rebuilt == data:
        click.echo(f"✅ Round trip is lossless ({len(result.nodes)} nodes)")
    else:
        click.echo("❌ Round trip changed the document:")
        for warning in result.warnings:
            click.echo(f"   • {warning}")
        sys.exit(1)


if __name__ == '__main__':
    main()
