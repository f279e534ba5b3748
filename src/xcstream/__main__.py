# src/xcstream/__main__.py

from xcstream.cli.main import cli

if __name__ == "__main__":
    cli()
