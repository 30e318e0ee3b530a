"""
ProfileTrace CLI - command line interface.
"""

import json
import os
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from pydantic import ValidationError

from . import __version__
from .config import ENV_CONFIG, ENV_ORIGIN, EngineConfig, load_config, save_config

# Load environment variables
load_dotenv()


def _engine_config(config_path: str | None) -> EngineConfig:
    """Config from --config, else from the environment."""
    try:
        if config_path:
            return load_config(config_path)
        return EngineConfig.from_env()
    except (FileNotFoundError, ValidationError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _load_html(source: str) -> str:
    from .fetcher import load_source

    try:
        snapshot = load_source(source)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not snapshot.success:
        click.echo(f"Error: could not fetch {source}: {snapshot.error}", err=True)
        sys.exit(1)
    return snapshot.html


@click.group()
@click.version_option(version=__version__, prog_name="profiletrace")
def main() -> None:
    """ProfileTrace - explainable profile extraction from HTML snapshots"""
    pass


@main.command()
@click.argument("source")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["json", "markdown"]),
    default="json",
    help="Output format (default: json)",
)
@click.option("--output", "-o", type=click.Path(), default=None, help="Write to file instead")
@click.option("--config", "-c", type=click.Path(), default=None, help="Selector config YAML")
def analyze(source: str, output_format: str, output: str | None, config: str | None) -> None:
    """Analyze a profile snapshot (file path or URL)."""
    from .analyzer import ProfileAnalyzer
    from .exporter import export_json, generate_report, render_report
    from .logger import ProgressLogger

    engine_config = _engine_config(config)
    html = _load_html(source)
    result = ProfileAnalyzer(engine_config).analyze_html(html)

    if output:
        path = Path(output)
        if output_format == "markdown":
            generate_report(result, path)
        else:
            export_json(result, path)
        click.echo(f"[ProfileTrace] Wrote {path}")
    elif output_format == "markdown":
        click.echo(render_report(result))
    else:
        click.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))

    logger = ProgressLogger(run_id=Path(source).name)
    for warning in result.metadata.warnings:
        logger.warning(warning)


@main.command()
@click.argument("source")
@click.option(
    "--kind",
    "-k",
    type=click.Choice(["reactors", "comments", "people"]),
    default="reactors",
    help="What to extract (default: reactors)",
)
@click.option("--origin", default=None, help="Post/page URL used to resolve relative links")
@click.option(
    "--limit",
    "-n",
    type=int,
    default=0,
    help="Maximum number of profiles to return; use 0 for unlimited (default: 0)",
)
@click.option("--output", "-o", type=click.Path(), default=None, help="Write JSON to file")
@click.option("--config", "-c", type=click.Path(), default=None, help="Selector config YAML")
def engagement(
    source: str,
    kind: str,
    origin: str | None,
    limit: int,
    output: str | None,
    config: str | None,
) -> None:
    """Extract reactors, commenters or company people from a snapshot."""
    from .dom import parse_html
    from .engagement import extract_account_profiles, extract_comments, extract_reactors
    from .exporter import export_engagement_json
    from .logger import ProgressLogger
    from .normalize import normalize_post_url

    engine_config = _engine_config(config)
    if origin:
        try:
            origin = normalize_post_url(origin)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    root = parse_html(_load_html(source))
    extractors = {
        "reactors": extract_reactors,
        "comments": extract_comments,
        "people": extract_account_profiles,
    }
    profiles = extractors[kind](root, origin=origin, limit=limit or None, config=engine_config)

    if output:
        count = export_engagement_json(profiles, Path(output))
        ProgressLogger(run_id=Path(source).name).engagement(kind, count)
        click.echo(f"[ProfileTrace] Wrote {count} {kind} to {output}")
    else:
        data = [p.model_dump(mode="json", by_alias=True, exclude_none=True) for p in profiles]
        click.echo(json.dumps(data, indent=2))


@main.command()
@click.argument("directory", type=click.Path())
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="runs",
    help="Output directory for results (default: runs/)",
)
@click.option("--workers", "-w", type=int, default=4, help="Concurrent analyses (default: 4)")
@click.option("--config", "-c", type=click.Path(), default=None, help="Selector config YAML")
@click.option("--verbose", "-v", is_flag=True, help="Show per-document warnings")
def batch(directory: str, output: str, workers: int, config: str | None, verbose: bool) -> None:
    """Analyze every *.html file in DIRECTORY concurrently."""
    from .batch import run_directory
    from .exporter import generate_batch_report
    from .logger import ProgressLogger

    engine_config = _engine_config(config)
    output_dir = Path(output)
    logger = ProgressLogger(run_id=Path(directory).name, verbose=verbose)

    try:
        items = run_directory(
            Path(directory),
            output_dir,
            config=engine_config,
            max_workers=max(1, workers),
            logger=logger,
        )
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    generate_batch_report(items, output_dir / "summary.md")
    failed = sum(1 for item in items if not item.ok)
    logger.finish(len(items), failed=failed, output_dir=str(output_dir))
    if failed:
        sys.exit(1)


@main.command()
@click.option("--dump", type=click.Path(), default=None, help="Write the default config YAML")
def selectors(dump: str | None) -> None:
    """Show the selector tier tables, or dump them as an editable config."""
    config = EngineConfig()

    if dump:
        path = save_config(config, dump)
        click.echo(f"[ProfileTrace] Wrote default config to {path}")
        return

    catalog = config.selectors
    for name in type(catalog).model_fields:
        value = getattr(catalog, name)
        click.echo(f"\n{name}:")
        for entry in value:
            if isinstance(entry, str):
                click.echo(f"  - {entry}")
                continue
            attribute = f" [@{entry.attribute}]" if entry.attribute else ""
            click.echo(f"  [{entry.name}]{attribute} {len(entry.selectors)} selectors")


@main.command()
def check() -> None:
    """Show which engine configuration is active."""
    click.echo("Checking configuration...\n")

    config_path = os.getenv(ENV_CONFIG)
    origin = os.getenv(ENV_ORIGIN)

    if config_path:
        click.echo(f"  {ENV_CONFIG}: {config_path}")
    else:
        click.echo(f"  {ENV_CONFIG}: NOT SET (built-in selector tables)")

    if origin:
        click.echo(f"  {ENV_ORIGIN}: {origin}")
    else:
        click.echo(f"  {ENV_ORIGIN}: NOT SET (default origin)")

    try:
        config = EngineConfig.from_env()
    except (FileNotFoundError, ValidationError) as e:
        click.echo(f"\nInvalid configuration: {e}", err=True)
        sys.exit(1)

    tiers = sum(
        len(value)
        for value in (getattr(config.selectors, n) for n in type(config.selectors).model_fields)
    )
    click.echo(f"\nOrigin: {config.origin}")
    click.echo(f"Selector tables loaded ({tiers} tiers/rows). Ready to run!")


if __name__ == "__main__":
    main()
