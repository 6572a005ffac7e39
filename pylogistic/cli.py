"""Command-line interface for pylogistic."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .config import DEFAULT_CONFIG
from .core.datasource import DATA_SUFFIXES, DataSource
from .core.exceptions import PyLogisticError
from .logistic import LogisticDesign, LogisticRegression, fit
from .utils import get_logger, json_log

app = typer.Typer(
    help='Train a logistic regression on a comma-separated data file.',
    add_completion=False,
)

log = get_logger(__name__)


def _fail(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=1)


@app.command()
def train(
    path: Annotated[
        Path,
        typer.Argument(
            help=f'Data file ({", ".join(DATA_SUFFIXES)}); the last column is the 0/1 label.',
        ),
    ],
    steps: Annotated[
        int,
        typer.Option('--steps', '-n', help='Number of gradient ascent steps.'),
    ] = DEFAULT_CONFIG.steps,
    learning_rate: Annotated[
        float,
        typer.Option('--learning-rate', '-a', help='Gradient ascent step size.'),
    ] = DEFAULT_CONFIG.learning_rate,
    threshold: Annotated[
        float,
        typer.Option('--threshold', help='Probability above which a sample is positive.'),
    ] = DEFAULT_CONFIG.threshold,
) -> None:
    """Load PATH, train for a fixed number of steps and report accuracy and loss."""
    if path.suffix.lower() not in DATA_SUFFIXES:
        raise _fail(
            f'No input data file found: {path} '
            f'(expected a {" or ".join(DATA_SUFFIXES)} file)'
        )

    try:
        config = DEFAULT_CONFIG.with_overrides(
            steps=steps, learning_rate=learning_rate, threshold=threshold,
        )
    except PyLogisticError as e:
        raise _fail(f'Invalid option: {e}') from e

    try:
        design = LogisticDesign.from_datasource(DataSource.from_file(path))
    except PyLogisticError as e:
        raise _fail(f'Invalid dataset at {path}: {e}') from e

    log.info(json_log('dataset loaded', path=str(path), n=design.n, p=design.p))
    typer.echo(f'\nUsing dataset: {path.name}')

    model = LogisticRegression(
        design.p,
        initial_coefficient=config.initial_coefficient,
        initial_intercept=config.initial_intercept,
    )

    # eval initial accuracy
    initial = model.evaluate(design.X, design.y, threshold=config.threshold)
    typer.echo(f'Initial accuracy = {initial.accuracy} | loss = {initial.loss}\n')

    result = fit(design.X, design.y, config=config, model=model)
    typer.echo(f'Log-Likelihood at last gradient step = {result.final_log_likelihood}')

    # eval learned model on train set
    typer.echo(f'Final accuracy = {result.accuracy} | loss = {result.loss}')
    learned = list(result.coefficients.data) + [result.intercept]
    typer.echo(f'Learned coefficients = {[float(v) for v in learned]}\n')


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == '__main__':
    main()
