"""Entry point: python -m pkgenv"""

from pkgenv.cli import cli

if __name__ == "__main__":
    cli()
