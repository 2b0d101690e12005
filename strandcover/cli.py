#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for StrandCover.

This module provides the main CLI entry point and all subcommands for
building, inspecting and searching path-cover haplotype indexes.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
import yaml

from .version import __version__
from .assembly_core.path_cover import (
    PathCoverPreconditionError,
    check_path_cover_preconditions,
    path_cover_index,
)
from .config.schema import (
    TEMPLATES,
    ConfigValidationError,
    load_config,
    save_config_template,
    validate_config,
)
from .index import HaplotypeIndex, encode_node
from .io_utils.gfa_loader import GFAFormatError, load_gfa, write_paths_gfa

logger = logging.getLogger(__name__)


def _setup_logging(level: str, log_file: Optional[str] = None):
    """Configure root logging the same way for every command."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def _log_level(ctx, configured: str = 'INFO') -> str:
    if ctx.obj.get('VERBOSE'):
        return 'DEBUG'
    if ctx.obj.get('QUIET'):
        return 'WARNING'
    return configured


def _parse_pattern(pattern: str) -> List[int]:
    """Parse '1+,2+,3-' into index tokens."""
    tokens = []
    for step in pattern.split(','):
        step = step.strip()
        if len(step) < 2 or step[-1] not in '+-' or not step[:-1].isdigit():
            raise click.BadParameter(f"Invalid step '{step}' (expected e.g. 12+ or 7-)")
        tokens.append(encode_node(int(step[:-1]), step[-1] == '-'))
    return tokens


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    StrandCover: Path Cover Haplotype Indexing

    Generates synthetic haplotypes covering every node and every k-node window
    of a bidirected sequence graph, and stores them in a compact, searchable
    haplotype index.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='strandcover_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t', type=click.Choice(TEMPLATES), default='default',
              help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except (OSError, ConfigValidationError) as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo("\nKey Settings:")
    click.echo(f"  Paths per component: {config['path_cover']['num_paths']}")
    click.echo(f"  Window length: {config['path_cover']['window_length']}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    click.echo("\nPath Cover:")
    click.echo(f"  Paths per component: {config['path_cover']['num_paths']}")
    click.echo(f"  Window length: {config['path_cover']['window_length']}")
    click.echo("\nIndex:")
    click.echo(f"  Batch size: {config['index']['batch_size']}")
    click.echo(f"  Sample interval: {config['index']['sample_interval']}")
    click.echo("\nOutput:")
    click.echo(f"  Progress: {config['output']['show_progress']}")
    click.echo(f"  Log level: {config['output']['logging']['level']}")


# ============================================================================
# Path Cover
# ============================================================================

@main.command()
@click.argument('graph_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output index file (.npz)')
@click.option('--num-paths', '-n', type=int, default=None,
              help='Paths per connected component (default: 16)')
@click.option('--window-length', '-k', type=int, default=None,
              help='Window length in nodes (default: 4, minimum: 2)')
@click.option('--batch-size', type=int, default=None,
              help='Index construction batch size in tokens')
@click.option('--sample-interval', type=int, default=None,
              help='Index sample interval')
@click.option('--progress', is_flag=True, default=False,
              help='Report progress for each component')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='YAML configuration file')
@click.option('--gfa-paths', type=click.Path(),
              help='Also write the paths as GFA P-lines to this file')
@click.pass_context
def cover(ctx, graph_file, output, num_paths, window_length, batch_size,
          sample_interval, progress, config_file, gfa_paths):
    """Build a path cover haplotype index for a GFA graph."""
    try:
        config = load_config(Path(config_file) if config_file else None)
    except ConfigValidationError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    # CLI options override the configuration file
    overrides = {
        ('path_cover', 'num_paths'): num_paths,
        ('path_cover', 'window_length'): window_length,
        ('index', 'batch_size'): batch_size,
        ('index', 'sample_interval'): sample_interval,
    }
    for (section, key), value in overrides.items():
        if value is not None:
            config[section][key] = value
    if progress:
        config['output']['show_progress'] = True

    errors = validate_config(config)
    if errors:
        for error in errors:
            click.echo(f"✗ {error}", err=True)
        sys.exit(1)

    _setup_logging(
        _log_level(ctx, config['output']['logging']['level']),
        config['output']['logging']['log_file'],
    )

    try:
        gfa = load_gfa(graph_file)
    except GFAFormatError as e:
        click.echo(f"✗ Error reading graph: {e}", err=True)
        sys.exit(1)

    n = config['path_cover']['num_paths']
    k = config['path_cover']['window_length']
    if gfa.graph.get_node_count() > 0 and n > 0:
        try:
            check_path_cover_preconditions(gfa.graph, k)
        except PathCoverPreconditionError as e:
            click.echo(f"✗ {e}", err=True)
            sys.exit(1)

    index = path_cover_index(
        gfa.graph,
        n=n,
        k=k,
        batch_size=config['index']['batch_size'],
        sample_interval=config['index']['sample_interval'],
        show_progress=config['output']['show_progress'],
    )
    written = index.save(output)
    if gfa_paths:
        write_paths_gfa(index, gfa.id_to_segment, gfa_paths)

    click.echo(f"✓ Index written: {written}")
    if index.has_metadata:
        click.echo(f"  {index.metadata}")
    else:
        click.echo("  Empty index (no nodes or no paths requested)")


# ============================================================================
# Index Inspection
# ============================================================================

@main.command()
@click.argument('index_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--paths', 'show_paths', is_flag=True, default=False,
              help='Print every path as a list of oriented nodes')
def inspect(index_file, show_paths):
    """Show statistics and metadata of a haplotype index."""
    index = HaplotypeIndex.load(index_file)

    click.echo(f"Index: {index_file}")
    click.echo(f"  Sequences: {index.sequence_count}")
    click.echo(f"  Total length: {index.size}")
    click.echo(f"  Node width: {index.node_width} bits")
    if index.has_metadata:
        click.echo(f"  Metadata: {index.metadata}")
    else:
        click.echo("  Metadata: none")

    if show_paths:
        for path_id in range(index.path_count):
            if index.has_metadata:
                name = index.metadata.path_names[path_id]
                label = f"sample{name.sample}#contig{name.contig}"
            else:
                label = f"path{path_id}"
            steps = ",".join(str(handle) for handle in index.path(path_id))
            click.echo(f"{label}\t{steps}")


@main.command()
@click.argument('index_file', type=click.Path(exists=True, dir_okay=False))
@click.argument('pattern')
@click.option('--locate', is_flag=True, default=False,
              help='List (sequence, offset) of every occurrence')
def find(index_file, pattern, locate):
    """Count occurrences of an oriented node sequence such as 1+,2+,3-."""
    tokens = _parse_pattern(pattern)
    index = HaplotypeIndex.load(index_file)

    click.echo(f"{pattern}\t{index.count(tokens)}")
    if locate:
        for sequence_id, offset in index.locate(tokens):
            click.echo(f"  sequence {sequence_id}\toffset {offset}")


if __name__ == '__main__':
    main()
