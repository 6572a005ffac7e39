from __future__ import annotations

from typer.testing import CliRunner

from pylogistic.cli import app

AXIS_CSV = '1,0,1\n0,1,0\n1,1,1\n0,0,0\n'


def test_cli_train_reports_accuracy_and_loss(write_csv):
    runner = CliRunner()
    path = write_csv(AXIS_CSV)

    result = runner.invoke(app, [str(path)])

    assert result.exit_code == 0, result.output
    assert 'Using dataset: data.csv' in result.output
    assert 'Initial accuracy = 0.5 | loss = ' in result.output
    assert 'Log-Likelihood at last gradient step = ' in result.output
    assert 'Final accuracy = 1.0 | loss = ' in result.output
    assert 'Learned coefficients = [' in result.output


def test_cli_train_accepts_options(write_csv):
    runner = CliRunner()
    path = write_csv(AXIS_CSV, name='axis.txt')

    result = runner.invoke(app, [str(path), '--steps', '0', '--learning-rate', '0.1'])

    assert result.exit_code == 0, result.output
    # no training: the learned parameters are the initial ones
    assert 'Learned coefficients = [1.0, 1.0, 0.5]' in result.output
    assert 'Log-Likelihood at last gradient step = nan' in result.output


def test_cli_requires_path():
    runner = CliRunner()

    result = runner.invoke(app, [])

    assert result.exit_code == 2


def test_cli_rejects_unknown_extension(write_csv):
    runner = CliRunner()
    path = write_csv(AXIS_CSV, name='data.json')

    result = runner.invoke(app, [str(path)])

    assert result.exit_code == 1
    assert 'No input data file found' in result.output


def test_cli_reports_missing_file(tmp_path):
    runner = CliRunner()

    result = runner.invoke(app, [str(tmp_path / 'absent.csv')])

    assert result.exit_code == 1
    assert 'Invalid dataset at' in result.output
    assert 'file not found' in result.output


def test_cli_reports_bad_token_with_line(write_csv):
    runner = CliRunner()
    path = write_csv('1,0,1\n0,oops,0\n')

    result = runner.invoke(app, [str(path)])

    assert result.exit_code == 1
    assert "line 2, column 2: non-numeric token 'oops'" in result.output


def test_cli_rejects_non_binary_label(write_csv):
    runner = CliRunner()
    path = write_csv('1,0,1\n0,1,2\n')

    result = runner.invoke(app, [str(path)])

    assert result.exit_code == 1
    assert 'Invalid dataset at' in result.output


def test_cli_rejects_negative_steps(write_csv):
    runner = CliRunner()
    path = write_csv(AXIS_CSV)

    result = runner.invoke(app, [str(path), '--steps=-5'])

    assert result.exit_code == 1
    assert 'Invalid option' in result.output
