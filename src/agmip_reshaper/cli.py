"""Command-line interface for the AgMIP document reshaper."""

import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Optional
import click
from .config import ReshapeConfig
from .document_reshaper import DocumentReshaper
from .parser import DocumentParser
from .types import ReshapeError, ReshapeResult


def _load_config(config_path: Optional[Path], strict: bool, clear_persists: bool,
                 profile: bool) -> ReshapeConfig:
    config = ReshapeConfig()
    if config_path is not None:
        config = ReshapeConfig.from_mapping(json.loads(config_path.read_text(encoding='utf-8')))

    overrides = {}
    if strict:
        overrides["strict"] = True
    if clear_persists:
        overrides["clear_persists"] = True
    if profile:
        overrides["enable_profiling"] = True
    return dataclasses.replace(config, **overrides) if overrides else config


def _read_document(ctx: click.Context, input_file: Path) -> dict:
    parser: DocumentParser = ctx.obj["parser"]
    try:
        return parser.parse(input_file.read_text(encoding='utf-8'))
    except ValueError as e:
        click.echo(f"❌ Error: {e}", err=True)
        ctx.exit(1)


def _run(ctx: click.Context, operation, *args) -> ReshapeResult:
    try:
        return operation(*args)
    except ReshapeError as e:
        click.echo(f"❌ Strict mode: {e}", err=True)
        ctx.exit(1)


def _emit(result: ReshapeResult, output: Optional[str]) -> None:
    json_string = DocumentParser.dumps(result.data)

    if output:
        output_path = Path(output)
        output_path.write_text(json_string, encoding='utf-8')
        click.echo(f"✅ Wrote {output_path}")
    else:
        click.echo(json_string)

    if result.has_warnings:
        click.echo(f"⚠️  {len(result.warnings)} warning(s):", err=True)
        for warning in result.warnings:
            location = f" [{warning.location}]" if warning.location else ""
            click.echo(f"   • {warning.type.value}: {warning.message}{location}", err=True)


@click.group()
@click.version_option(version="0.15.0")
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='JSON file with reshaping conventions')
@click.option('--strict', is_flag=True, help='Fail on the first dropped or overwritten value')
@click.option('--clear-persists', is_flag=True, help='Empty-string clears also reset the inherited value')
@click.option('--profile', is_flag=True, help='Log timing and memory for each operation')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.pass_context
def main(ctx: click.Context, config_path: Optional[Path], strict: bool,
         clear_persists: bool, profile: bool, verbose: bool):
    """AgMIP Reshaper - Decompress and flatten AgMIP experiment documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else (logging.INFO if profile else logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True
    )

    try:
        config = _load_config(config_path, strict, clear_persists, profile)
    except (ValueError, TypeError) as e:
        raise click.BadParameter(str(e), param_hint="--config")

    ctx.ensure_object(dict)
    ctx.obj["reshaper"] = DocumentReshaper(config)
    ctx.obj["parser"] = DocumentParser()


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', help='Output JSON file path')
@click.pass_context
def decompress(ctx: click.Context, input_file: Path, output: Optional[str]):
    """Expand every bucket's record list to complete records."""
    reshaper: DocumentReshaper = ctx.obj["reshaper"]
    document = _read_document(ctx, input_file)
    _emit(_run(ctx, reshaper.decompress_all, document), output)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', help='Output JSON file path')
@click.pass_context
def compress(ctx: click.Context, input_file: Path, output: Optional[str]):
    """Omit record values repeated from earlier records."""
    reshaper: DocumentReshaper = ctx.obj["reshaper"]
    document = _read_document(ctx, input_file)
    _emit(_run(ctx, reshaper.compress_all, document), output)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', help='Output JSON file path')
@click.pass_context
def flatten(ctx: click.Context, input_file: Path, output: Optional[str]):
    """Merge global and bucket values into one flat object."""
    reshaper: DocumentReshaper = ctx.obj["reshaper"]
    document = _read_document(ctx, input_file)
    _emit(_run(ctx, reshaper.flatten_globals, document), output)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--key', '-k', 'keys', multiple=True, required=True, help='Value to extract (repeatable)')
@click.option('--output', '-o', help='Output JSON file path')
@click.pass_context
def extract(ctx: click.Context, input_file: Path, keys, output: Optional[str]):
    """Extract named values from the flattened document."""
    reshaper: DocumentReshaper = ctx.obj["reshaper"]
    document = _read_document(ctx, input_file)
    _emit(_run(ctx, reshaper.extract, document, keys), output)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def buckets(ctx: click.Context, input_file: Path):
    """List the bucket names of a document."""
    reshaper: DocumentReshaper = ctx.obj["reshaper"]
    document = _read_document(ctx, input_file)
    for name in reshaper.list_bucket_names(document):
        click.echo(name)


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def inspect(ctx: click.Context, input_file: Path):
    """Summarize the globals, buckets and record counts of a document."""
    reshaper: DocumentReshaper = ctx.obj["reshaper"]
    document = _read_document(ctx, input_file)
    analysis = reshaper.classifier.analyze_document(document)

    click.echo(f"📊 {analysis['total_keys']} top-level keys: {analysis['value_kinds']}")
    for name, bucket in analysis["buckets"].items():
        list_info = f"{bucket['record_count']} records in '{bucket['list_key']}'" \
            if bucket["list_key"] else "no records"
        click.echo(f"   • {name}: {bucket['scalar_count']} values, {list_info}")


if __name__ == '__main__':
    main()
