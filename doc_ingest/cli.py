"""
Command line interface for doc-ingest.

Subcommands: load, chunk
"""

import json
import logging
import sys
from pathlib import Path

import click

from doc_ingest.chunker import ChunkError
from doc_ingest.config import ConfigError, load_config
from doc_ingest.loader import LoadError
from doc_ingest.pipeline import IngestPipeline


def _fail(message: str):
    click.echo(click.style(f"✗ {message}", fg="red"), err=True)
    sys.exit(1)


def _build_pipeline(config, chunk_size=None, overlap=None) -> IngestPipeline:
    cfg = load_config(config)
    logging.basicConfig(level=cfg.get_log_level())

    data = dict(cfg.data)
    chunking = dict(cfg.get_chunking_config())
    if chunk_size is not None:
        chunking['chunk_size'] = chunk_size
    if overlap is not None:
        chunking['overlap_size'] = overlap
    data['chunking'] = chunking

    return IngestPipeline(data)


@click.group()
@click.version_option(package_name='doc-ingest')
def cli():
    """doc-ingest - extract text from documents and chunk it by lines."""
    pass


@cli.command('load')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', type=click.Path(exists=True), help='Config file path')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default='text')
def load_command(path, config, output_format):
    """
    Extract text and metadata from a document.

    Example:
        doc-ingest load report.pdf --format json
    """
    pipeline = None
    try:
        pipeline = _build_pipeline(config)
        document = pipeline.load(path)
    except (ConfigError, LoadError, ChunkError) as e:
        _fail(str(e))
    finally:
        if pipeline is not None:
            pipeline.close()

    if output_format == 'json':
        click.echo(json.dumps(document.to_dict(), indent=2))
        return

    for key, value in sorted((document.metadata or {}).items()):
        click.echo(click.style(f"{key}: ", fg="cyan") + str(value))
    click.echo()
    click.echo(document.content)


@cli.command('chunk')
@click.argument('path', type=click.Path(exists=True))
@click.option('--config', type=click.Path(exists=True), help='Config file path')
@click.option('--chunk-size', type=int, help='Maximum lines per chunk')
@click.option('--overlap', type=int, help='Lines repeated between consecutive chunks')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default='text')
def chunk_command(path, config, chunk_size, overlap, output_format):
    """
    Split a document (or every document in a directory) into line chunks.

    Example:
        doc-ingest chunk notes.md --chunk-size 20 --overlap 4
    """
    pipeline = None
    try:
        pipeline = _build_pipeline(config, chunk_size, overlap)
        if Path(path).is_dir():
            chunks = pipeline.ingest_directory(path)
        else:
            chunks = pipeline.ingest_file(path)
    except (ConfigError, LoadError, ChunkError) as e:
        _fail(str(e))
    finally:
        if pipeline is not None:
            pipeline.close()

    if output_format == 'json':
        click.echo(json.dumps([chunk.to_dict() for chunk in chunks], indent=2))
        return

    if not chunks:
        click.echo(click.style("No content to chunk.", fg="yellow"))
        return

    click.echo(click.style(f"✓ {len(chunks)} chunk(s)\n", fg="green"))
    for chunk in chunks:
        source = chunk.metadata.get('source_path', '')
        click.echo(click.style(f"[{chunk.index}] {source}", fg="cyan"))
        click.echo(chunk.content)
        click.echo()


if __name__ == '__main__':
    cli()
