"""Command-line interface for the protein matching tool."""

import sys
from pathlib import Path

import click

from . import __version__
from .benchmark import EngineBenchmark, speedup_table
from .cli_utils import echo, resolve_query, secho, set_quiet_mode
from .config import Config, get_default_config_path, create_example_config
from .engines import Engine, get_engine
from .error_handler import ErrorHandler
from .input_parser import InputParser
from .lcs import lcs_string
from .logging_config import setup_logging
from .matcher import rank_matches
from .output_formatter import OutputFormatter

ENGINE_CHOICES = [engine.value for engine in Engine]


@click.group(invoke_without_command=True)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress all output except errors')
@click.option('--config', type=click.Path(exists=True), help='Configuration file path')
@click.option('--log-dir', type=click.Path(), help='Also write logs to this directory')
@click.option('--generate-config', is_flag=True, help='Generate example configuration file')
@click.version_option(__version__)
@click.pass_context
def cli(ctx, verbose, quiet, config, log_dir, generate_config):
    """Protein best-match search by longest common subsequence.

    Examples:
        protein-match match proteins.fasta MKTAYIAKQR
        protein-match score MEOW MOVE
        protein-match benchmark --lengths 4,8,12
    """
    if quiet and verbose:
        click.echo("Error: Cannot use both --quiet and --verbose", err=True)
        sys.exit(1)

    set_quiet_mode(quiet)

    if generate_config:
        config_path = create_example_config()
        echo(f"Generated example configuration file: {config_path}")
        sys.exit(0)

    config_path = Path(config) if config else get_default_config_path()
    cfg = Config.from_file(config_path)
    cfg.merge_env_vars()
    cfg.merge_cli_args(log_dir=log_dir)

    level = 'DEBUG' if verbose else cfg.logging.level
    setup_logging(
        log_level=level,
        log_dir=cfg.logging.directory,
        colors=cfg.logging.colors,
        quiet=quiet
    )

    ctx.obj = {'config': cfg, 'errors': ErrorHandler()}

    if ctx.invoked_subcommand is None:
        echo(ctx.get_help())


@cli.command()
@click.argument('input_file', type=click.Path(exists=True))
@click.argument('query')
@click.option('--engine', '-e', type=click.Choice(ENGINE_CHOICES), help='LCS engine (default: dp)')
@click.option('--top', '-n', type=click.IntRange(min=1), help='Number of ranked matches to report')
@click.option('--workers', '-w', type=click.IntRange(min=1), help='Score records on this many threads')
@click.option('--chunk-size', type=click.IntRange(min=1), help='Records per parallel batch')
@click.option('--max-exhaustive-length', type=click.IntRange(min=0),
              help='Refuse exhaustive search on sequences longer than this')
@click.option('--output', '-o', type=click.Path(), help='Write ranked matches to this file')
@click.option('--output-format', type=click.Choice(OutputFormatter.FORMATS),
              help='Output file format (default: from file suffix)')
@click.option('--include-sequence', is_flag=True, help='Include full sequences in output')
@click.pass_context
def match(ctx, input_file, query, engine, top, workers, chunk_size, max_exhaustive_length,
          output, output_format, include_sequence):
    """Find the record in INPUT_FILE most similar to QUERY.

    QUERY is a sequence, or @FILE to use the first record of FILE.
    """
    cfg: Config = ctx.obj['config']
    errors: ErrorHandler = ctx.obj['errors']
    cfg.merge_cli_args(
        engine=engine,
        top=top,
        workers=workers,
        chunk_size=chunk_size,
        max_exhaustive_length=max_exhaustive_length,
        output_format=output_format,
        include_sequence=include_sequence
    )

    try:
        label, query_sequence = resolve_query(query)
        parser = InputParser()
        proteins = parser.parse_file(input_file)
        echo(f"Read {len(proteins)} proteins from {input_file} "
             f"(format: {parser.get_format_info()['format']})")

        matches = rank_matches(
            proteins,
            query_sequence,
            engine=cfg.engine.default,
            top=cfg.output.top,
            max_length=cfg.engine.max_exhaustive_length,
            max_workers=cfg.workers,
            chunk_size=cfg.parallel.chunk_size
        )
    except click.UsageError:
        raise
    except Exception as e:
        context = errors.handle_error(e, 'match', item_id=input_file)
        secho(f"ERROR: {context.message}", err=True, fg='red')
        if context.suggestion:
            echo(context.suggestion, err=True)
        sys.exit(1)

    formatter = OutputFormatter(
        query_sequence,
        engine=cfg.engine.default,
        include_sequence=cfg.output.include_sequence
    )

    echo(f"Query: {label} ({len(query_sequence)} residues)")
    echo(formatter.format_summary(matches[0]))

    if len(matches) > 1:
        echo("\nRanked matches:")
        for row in formatter.format_matches(matches):
            echo(f"  {row['Rank']:>3}. [{row['LCS Score']}] {row['Description']}")

    if output:
        try:
            path = formatter.format_results(matches, output, format=cfg.output.format)
        except OSError as e:
            context = errors.handle_error(e, 'write output', item_id=output)
            secho(f"ERROR: Failed to write output file: {context.message}", err=True, fg='red')
            sys.exit(1)
        echo(f"Results written to: {path}")


@cli.command()
@click.argument('first')
@click.argument('second')
@click.option('--engine', '-e', type=click.Choice(ENGINE_CHOICES), help='LCS engine (default: dp)')
@click.option('--show-subsequence', is_flag=True, help='Also print one longest common subsequence')
@click.pass_context
def score(ctx, first, second, engine, show_subsequence):
    """Print the LCS length of FIRST and SECOND."""
    cfg: Config = ctx.obj['config']
    errors: ErrorHandler = ctx.obj['errors']
    cfg.merge_cli_args(engine=engine)

    try:
        length = get_engine(cfg.engine.default, max_length=cfg.engine.max_exhaustive_length)(first, second)
    except ValueError as e:
        context = errors.handle_error(e, 'score')
        secho(f"ERROR: {context.message}", err=True, fg='red')
        sys.exit(1)

    click.echo(length)
    if show_subsequence:
        click.echo(lcs_string(first, second))


def _parse_lengths(ctx, param, value):
    try:
        lengths = [int(part) for part in value.split(',') if part.strip()]
    except ValueError:
        raise click.BadParameter('lengths must be comma-separated integers')
    if not lengths or any(n < 0 for n in lengths):
        raise click.BadParameter('lengths must be non-negative')
    return lengths


@cli.command()
@click.option('--lengths', default='2,4,6,8,10', callback=_parse_lengths,
              help='Comma-separated sequence lengths to time')
@click.option('--repeats', type=click.IntRange(min=1), default=3, help='Random pairs per length')
@click.option('--engine', '-e', 'engines', type=click.Choice(ENGINE_CHOICES), multiple=True,
              help='Engine to time (repeatable; default: both)')
@click.option('--seed', type=int, default=0, help='Random seed')
@click.option('--output', '-o', type=click.Path(), help='Write timings as CSV')
def benchmark(lengths, repeats, engines, seed, output):
    """Time the LCS engines on random protein sequences."""
    engines = engines or ENGINE_CHOICES
    bench = EngineBenchmark(repeats=repeats, seed=seed)

    results = bench.run(lengths, engines)
    echo(speedup_table(results).to_string(index=False))

    if output:
        results.to_csv(output, index=False)
        echo(f"Timings written to: {output}")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
