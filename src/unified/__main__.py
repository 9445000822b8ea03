from unified.cli import cli

cli()
