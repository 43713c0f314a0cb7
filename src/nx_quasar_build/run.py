"""
Serve workspace applications with the Nx task runner.

Provides two thin wrappers:
- run: `nx serve <project>` for exactly one project
- run-many: `nx run-many -t serve -p <a,b,...>` for one or more projects

Arguments are validated before anything is executed; a usage error exits with
status 1.
"""

from typing import Annotated, Sequence

import typer

from nx_quasar_build import command, config
from nx_quasar_build.command import CommandExecutor
from nx_quasar_build.config import WorkspaceConfig
from nx_quasar_build.utils import logger

LOG = logger(__file__)

TARGET = "serve"
PROJECT_SEPARATOR = ","

_PROJECTS_ARGUMENT = Annotated[
    list[str] | None,
    typer.Argument(help="Names of the workspace projects to serve."),
]

app = typer.Typer(
    help="Serve a single workspace application.",
    context_settings=config.CONTEXT_SETTINGS,
)
many_app = typer.Typer(
    help="Serve several workspace applications at once.",
    context_settings=config.CONTEXT_SETTINGS,
)


@app.callback(invoke_without_command=True)
def run(
    ctx: typer.Context,
    projects: _PROJECTS_ARGUMENT = None,
    root_dir: config.ROOT_DIR_OPTION = None,
    nx: config.NX_OPTION = "nx",
):
    """
    Serve one application with `nx serve`.
    """
    if not projects:
        LOG.error("You must provide an app name.\nExample: nx-quasar run project-name")
        raise typer.Exit(code=1)
    if len(projects) > 1:
        LOG.error(
            "You can't provide more than one app name.\n"
            "Example: nx-quasar run project-name"
        )
        raise typer.Exit(code=1)
    workspace_config = config.workspace_config(root_dir=root_dir, nx=nx)
    serve(projects[0], workspace_config, command.executor(ctx))


@many_app.callback(invoke_without_command=True)
def run_many(
    ctx: typer.Context,
    projects: _PROJECTS_ARGUMENT = None,
    root_dir: config.ROOT_DIR_OPTION = None,
    nx: config.NX_OPTION = "nx",
):
    """
    Serve one or more applications with `nx run-many`.
    """
    if not projects:
        LOG.error(
            "You must provide at least one app name.\n"
            "Example: nx-quasar run-many admin-layout user-layout"
        )
        raise typer.Exit(code=1)
    workspace_config = config.workspace_config(root_dir=root_dir, nx=nx)
    serve_many(projects, workspace_config, command.executor(ctx))


def serve(project: str, workspace_config: WorkspaceConfig, executor: CommandExecutor):
    _execute([workspace_config.nx, TARGET, project], workspace_config, executor)


def serve_many(
    projects: Sequence[str],
    workspace_config: WorkspaceConfig,
    executor: CommandExecutor,
):
    args = [
        workspace_config.nx,
        "run-many",
        "-t",
        TARGET,
        "-p",
        PROJECT_SEPARATOR.join(projects),
    ]
    _execute(args, workspace_config, executor)


def _execute(
    args: list[str], workspace_config: WorkspaceConfig, executor: CommandExecutor
):
    LOG.info(f"Running: {command.format_args(args)}")
    executor(args, cwd=workspace_config.root_dir)


def main():
    app()


def main_many():
    many_app()


if __name__ == "__main__":
    main()
