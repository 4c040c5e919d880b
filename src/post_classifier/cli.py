"""Command-line interface for post-classifier.

Provides ``train``, ``test``, and ``predict`` commands with plain,
rich, or JSON output using the ``click`` and ``rich`` libraries.

Usage::

    post-classifier train train.csv
    post-classifier test train.csv test.csv
    post-classifier predict train.csv "the game was great"
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .classifier import NaiveBayesClassifier
from .corpus import CorpusReader
from .evaluation import EvaluationResult, evaluate
from .exceptions import PostClassifierError
from .reporting import TrainingReport, format_number, training_report

console = Console()

_PACKAGE_LOGGER = "post_classifier"


def _configure_logging(verbose: bool) -> None:
    """Route package log records through rich on stderr."""
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


def _fail(error: Exception) -> NoReturn:
    console.print("[bold red]Error:[/]", Text(str(error)))
    sys.exit(1)


def _train(reader: CorpusReader, path: Path) -> tuple[NaiveBayesClassifier, list]:
    posts = reader.read_all(path)
    model = NaiveBayesClassifier().train(posts)
    return model, posts


output_option = click.option(
    "--output", "-o", type=click.Choice(["text", "rich", "json"]), default="text",
    help="Output format.",
)
precision_option = click.option(
    "--precision", "-p", type=click.IntRange(min=1), default=3, show_default=True,
    help="Significant digits for log-probabilities in text and rich output.",
)
delimiter_option = click.option(
    "--delimiter", "-d", default=",", show_default=True,
    help="Field separator used by the corpus files.",
)


@click.group()
@click.version_option(package_name="post-classifier")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Naive Bayes tag classifier for short text posts.

    Train on a CSV corpus with ``tag`` and ``content`` columns, then
    inspect the learned parameters or classify new posts.
    """
    _configure_logging(verbose)


@main.command()
@click.argument("train_file", type=click.Path(path_type=Path))
@output_option
@precision_option
@delimiter_option
def train(train_file: Path, output: str, precision: int, delimiter: str) -> None:
    """Train on TRAIN_FILE and print the learned parameters.

    Example: post-classifier train train.csv
    """
    reader = CorpusReader(delimiter=delimiter)
    try:
        model, posts = _train(reader, train_file)
        report = training_report(model, posts)
    except PostClassifierError as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    elif output == "rich":
        _render_training(report, precision)
    else:
        click.echo(report.to_text(precision), nl=False)


@main.command()
@click.argument("train_file", type=click.Path(path_type=Path))
@click.argument("test_file", type=click.Path(path_type=Path))
@output_option
@precision_option
@delimiter_option
def test(
    train_file: Path,
    test_file: Path,
    output: str,
    precision: int,
    delimiter: str,
) -> None:
    """Train on TRAIN_FILE, then predict every post in TEST_FILE.

    Example: post-classifier test train.csv test.csv
    """
    reader = CorpusReader(delimiter=delimiter)
    try:
        model, _ = _train(reader, train_file)
        result = evaluate(model, reader.read(test_file))
    except PostClassifierError as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif output == "rich":
        _render_evaluation(result, precision)
    else:
        click.echo(result.to_text(precision), nl=False)


@main.command()
@click.argument("train_file", type=click.Path(path_type=Path))
@click.argument("text")
@output_option
@precision_option
@delimiter_option
def predict(
    train_file: Path,
    text: str,
    output: str,
    precision: int,
    delimiter: str,
) -> None:
    """Train on TRAIN_FILE and classify TEXT.

    Example: post-classifier predict train.csv "the game was great"
    """
    reader = CorpusReader(delimiter=delimiter)
    try:
        model, _ = _train(reader, train_file)
        prediction = model.predict(text)
    except PostClassifierError as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(prediction.to_dict(), indent=2))
    elif output == "rich":
        body = Text(prediction.tag, style="bold")
        body.append(f"\nlog-probability score = {format_number(prediction.log_score, precision)}")
        console.print(Panel(
            body,
            title="Prediction",
            border_style="blue",
        ))
    else:
        click.echo(
            f"predicted = {prediction.tag}, log-probability score = "
            f"{format_number(prediction.log_score, precision)}"
        )


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_training(report: TrainingReport, precision: int) -> None:
    """Render a TrainingReport as rich tables."""
    console.print()
    console.print(Panel(
        f"Trained on [bold]{report.trained_on}[/] examples | "
        f"Vocabulary size: [bold]{report.vocabulary_size}[/]",
        title="Training Summary",
        border_style="blue",
    ))

    classes = Table(title="Classes")
    classes.add_column("Tag", style="cyan")
    classes.add_column("Examples", justify="right")
    classes.add_column("Log-prior", justify="right")
    for c in report.classes:
        classes.add_row(Text(c.tag), str(c.examples), format_number(c.log_prior, precision))
    console.print(classes)

    if report.parameters:
        params = Table(title="Classifier Parameters")
        params.add_column("Tag", style="cyan")
        params.add_column("Word", style="white")
        params.add_column("Count", justify="right")
        params.add_column("Log-likelihood", justify="right")
        for p in report.parameters:
            params.add_row(
                Text(p.tag),
                Text(p.word),
                str(p.count),
                format_number(p.log_likelihood, precision),
            )
        console.print(params)
    console.print()


def _render_evaluation(result: EvaluationResult, precision: int) -> None:
    """Render an EvaluationResult as a rich table plus metrics."""
    console.print()
    table = Table(title=f"Test Data (trained on {result.trained_on} examples)", show_lines=True)
    table.add_column("#", justify="right", width=4)
    table.add_column("Correct", style="cyan")
    table.add_column("Predicted")
    table.add_column("Score", justify="right")
    table.add_column("Content", style="white", max_width=60)

    for i, r in enumerate(result.records, 1):
        predicted = Text(r.predicted, style="green" if r.is_correct else "bold red")
        table.add_row(
            str(i),
            Text(r.correct),
            predicted,
            format_number(r.log_score, precision),
            Text(r.content),
        )
    console.print(table)

    if result.records:
        console.print(result.metrics.summary(), markup=False, highlight=False)
        console.print()

    if result.accuracy > 0.7:
        style = "bold green"
    elif result.accuracy > 0.3:
        style = "bold yellow"
    else:
        style = "bold red"
    console.print(
        f"Performance: [{style}]{result.num_correct} / {result.num_predicted}[/] "
        "posts predicted correctly"
    )
    console.print()


if __name__ == "__main__":
    main()
