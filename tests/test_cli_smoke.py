"""Smoke test: the CLI loads and lists its commands"""

from typer.testing import CliRunner

from logpub.cli.cli import app


def test_cli_smoke():
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("build", "extract", "commit", "export", "parse", "validate", "stats"):
        assert name in result.output
