from ghacheck.cli import cli

cli()
