"""
Main entry point for the nx-quasar CLI.

This module aggregates the subcommands from the other modules and provides a
unified interface for the Nx workspace. The CLI provides commands for:
- Creating Quasar applications
- Serving a single application
- Serving several applications at once
"""

import typer

from nx_quasar_build import create, run

app = typer.Typer()
app.add_typer(create.app, name="create")
app.add_typer(run.app, name="run")
app.add_typer(run.many_app, name="run-many")


def main():
    """
    Execute the Typer application.
    """
    app()


if __name__ == "__main__":
    main()
