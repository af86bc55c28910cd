#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: cli.py
# Project: textsense
# Description: Command line interface for the textsense engine
# Created: 2025-05-25 16:21:03
# Modified: 2025-06-03 15:10:42

import sys
import json as j
import click
import logging
import pytz

from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box
from rich.pretty import Pretty
from rich.logging import RichHandler

from textsense.__version__ import __version__
from textsense.config import EngineConfig
from textsense.engine import NLPEngine
from textsense.models import AnalysisOptions, TokenUnit

# Setup console
console = Console()

# Constants
TIMESTAMP = datetime.now(pytz.UTC).isoformat()

logger = logging.getLogger(__name__)


# Utility functions
def to_plain(data: Any) -> Any:
    """Convert result objects (and lists of them) to plain data"""
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if isinstance(data, list):
        return [to_plain(item) for item in data]
    return data


def handle_output(
    data: Any,
    source: str,
    json_output: bool = False
):
    """Handle output in either JSON or rich formatted mode"""
    data = to_plain(data)

    if json_output:
        if isinstance(data, dict):
            data["timestamp"] = TIMESTAMP
            data["source"] = source
        else:
            data = {
                "timestamp": TIMESTAMP,
                "source": source,
                "content": data
            }

        output = j.dumps(data, indent=4, ensure_ascii=False, default=str)
        click.echo(output)
        return output

    if not isinstance(data, str):
        output = Pretty(data)
    else:
        output = data

    console.print(Panel(
        output,
        title=f"Source: {source}",
        border_style="green",
        expand=True
    ))

    return data


def read_text(text: Optional[str]) -> Optional[str]:
    """Return the text argument, or whatever was piped in on stdin"""
    if text:
        return text
    if sys.stdin.isatty():
        return None
    data = sys.stdin.read()
    return data if data.strip() else None


def source_label(text: str, limit: int = 40) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else flat[:limit - 3] + "..."


def get_engine(ctx: click.Context) -> NLPEngine:
    """Build and initialize the engine once per invocation"""
    root = ctx.find_root()
    root.ensure_object(dict)
    engine = root.obj.get("engine")
    if engine is None:
        engine = NLPEngine(root.obj.get("config"))
        engine.initialize()
        root.call_on_close(engine.shutdown)
        root.obj["engine"] = engine
    return engine


def display_table(
    rows: List[Dict[str, Any]],
    columns: List[str],
    title: str
):
    """Pretty-print a list of records in a formatted table"""
    table = Table(
        title=title,
        box=box.ROUNDED,
        expand=True,
        show_lines=True
    )
    for i, column in enumerate(columns):
        if i == 0:
            table.add_column(column.replace("_", " ").title(), style="bold cyan", no_wrap=True)
        else:
            table.add_column(column.replace("_", " ").title(), overflow="fold")

    for row in rows:
        table.add_row(*[f"{row[c]:.3f}" if isinstance(row[c], float) else str(row[c]) for c in columns])

    console.print(Panel(table, border_style="blue"))


def require_text(text: Optional[str]) -> Optional[str]:
    text = read_text(text)
    if not text:
        console.print("[yellow]No input text provided.[/yellow]")
    return text


# Main CLI group
@click.group()
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='JSON file with engine configuration')
@click.option('--verbose', is_flag=True, help='Show informational log messages')
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config_path: Optional[str], verbose: bool):
    """
    textsense: On-device text analysis toolkit

    Detect languages, tokenize, and extract sentiment, entities, keywords,
    topics and summaries from text given as an argument or on stdin.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.ERROR,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)]
    )

    ctx.ensure_object(dict)
    if config_path and "config" not in ctx.obj:
        with open(config_path, "r", encoding="utf-8") as f:
            ctx.obj["config"] = EngineConfig.from_dict(j.load(f))
        logger.info(f"Loaded configuration from {config_path}")


@cli.command()
@click.argument('text', required=False)
@click.option('--comprehensive', is_flag=True, help='Run every sub-analysis')
@click.option('--fast', is_flag=True, help='Sentiment and keywords only')
@click.option('--max-keywords', type=int, default=10, help='Maximum keywords to return')
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def analyze(ctx, text: Optional[str], comprehensive: bool, fast: bool, max_keywords: int, json: bool):
    """Run the full analysis pipeline on text"""
    text = require_text(text)
    if not text:
        return

    if comprehensive:
        options = AnalysisOptions.comprehensive()
    elif fast:
        options = AnalysisOptions.fast()
    else:
        options = AnalysisOptions(max_keywords=max_keywords)

    result = get_engine(ctx).analyze(text, options)
    handle_output(result, source_label(text), json)


@cli.command()
@click.argument('text', required=False)
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def language(ctx, text: Optional[str], json: bool):
    """Detect the language of text"""
    text = require_text(text)
    if not text:
        return

    result = get_engine(ctx).detect_language(text)
    if json:
        handle_output(result, source_label(text), json)
        return

    display_table(
        [h.to_dict() for h in result.hypotheses],
        ["language", "confidence"],
        title=f"Detected language: {result.detected_language}"
    )


@cli.command()
@click.argument('text', required=False)
@click.option('--unit', type=click.Choice([u.value for u in TokenUnit]), default='word',
              help='Segmentation unit')
@click.option('--lang', default='en', help='Language code used for segmentation')
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def tokenize(ctx, text: Optional[str], unit: str, lang: str, json: bool):
    """Split text into words, sentences or paragraphs"""
    text = require_text(text)
    if not text:
        return

    result = get_engine(ctx).tokenize(text, unit, lang)
    handle_output(result if json else result.tokens, source_label(text), json)


@cli.command()
@click.argument('text', required=False)
@click.option('--lang', default=None, help='Language code (detected when omitted)')
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def sentiment(ctx, text: Optional[str], lang: Optional[str], json: bool):
    """Classify the sentiment of text"""
    text = require_text(text)
    if not text:
        return

    result = get_engine(ctx).analyze_sentiment(text, lang)
    handle_output(result, source_label(text), json)


@cli.command()
@click.argument('text', required=False)
@click.option('--lang', default=None, help='Language code (detected when omitted)')
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def entities(ctx, text: Optional[str], lang: Optional[str], json: bool):
    """Extract named entities from text"""
    text = require_text(text)
    if not text:
        return

    result = get_engine(ctx).extract_entities(text, lang)
    if json:
        handle_output(result, source_label(text), json)
        return

    if not result.entities:
        console.print("[yellow]No entities found.[/yellow]")
        return
    display_table(
        [e.to_dict() for e in result.entities],
        ["type", "text", "start", "end", "confidence"],
        title=f"{result.entity_count} entities"
    )


@cli.command()
@click.argument('text', required=False)
@click.option('--count', type=int, default=10, help='Maximum keywords to return')
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def keywords(ctx, text: Optional[str], count: int, json: bool):
    """Extract TF-IDF keywords from text"""
    text = require_text(text)
    if not text:
        return

    result = get_engine(ctx).extract_keywords(text, count)
    if json:
        handle_output(result, source_label(text), json)
        return

    display_table([k.to_dict() for k in result], ["word", "score", "frequency"], title="Keywords")


@cli.command()
@click.argument('text', required=False)
@click.option('--count', type=int, default=5, help='Number of topics')
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def topics(ctx, text: Optional[str], count: int, json: bool):
    """Group keywords into topics"""
    text = require_text(text)
    if not text:
        return

    result = get_engine(ctx).extract_topics(text, count)
    handle_output(result, source_label(text), json)


@cli.command()
@click.argument('text', required=False)
@click.option('--sentences', type=int, default=3, help='Number of sentences in summary')
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def summarize(ctx, text: Optional[str], sentences: int, json: bool):
    """Summarize text with extractive sentence scoring"""
    text = require_text(text)
    if not text:
        return

    result = get_engine(ctx).summarize_text(text, sentences)
    handle_output(result if json else result.summary, source_label(text), json)


@cli.command()
@click.argument('text_a')
@click.argument('text_b')
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def similarity(ctx, text_a: str, text_b: str, json: bool):
    """Compare two texts with Jaccard and cosine similarity"""
    result = get_engine(ctx).calculate_similarity(text_a, text_b)
    handle_output(result, f"{source_label(text_a, 20)} | {source_label(text_b, 20)}", json)


@cli.command()
@click.argument('text', required=False)
@click.option('--category', '-c', 'categories', multiple=True, help='Candidate category (repeatable)')
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def classify(ctx, text: Optional[str], categories: tuple, json: bool):
    """Pick the category whose keywords best match text"""
    text = require_text(text)
    if not text:
        return

    result = get_engine(ctx).classify_text(text, list(categories))
    handle_output(result, source_label(text), json)


@cli.command()
@click.option('--json', is_flag=True, help='Output results as JSON')
@click.pass_context
def languages(ctx, json: bool):
    """List supported language codes"""
    supported = get_engine(ctx).get_supported_languages()
    if json:
        handle_output(supported, "languages", json)
        return

    table = Table(title="Supported Languages", box=box.ROUNDED)
    table.add_column("Code", style="cyan")
    for code in supported:
        table.add_row(code)
    console.print(table)


def main():
    try:
        cli()
    except Exception as e:
        console.print(f"[bold red]Error:[/] {str(e)}")
        logger.debug("Command failed", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
