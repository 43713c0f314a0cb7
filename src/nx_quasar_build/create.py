"""
Utilities for creating Quasar applications in an Nx workspace.

The create command generates a Vue 3 application with the Nx generator and
wires Quasar into it:
- Installs missing Quasar runtime and dev dependencies at the workspace root
- Generates apps/<name> with the @nx/vue:app generator
- Patches src/main.ts and vite.config.ts and writes the Sass variables file

Patching is idempotent, so it is safe to run against an app that was already
patched by hand or by an earlier run.
"""

from typing import Annotated

import typer

from nx_quasar_build import command, config, manifest, quasar
from nx_quasar_build.command import CommandExecutor
from nx_quasar_build.config import WorkspaceConfig
from nx_quasar_build.manifest import Manifest
from nx_quasar_build.utils import logger

LOG = logger(__file__)

USAGE = "Usage: nx-quasar create <app-name>"

app = typer.Typer(
    help="Create a Quasar application in the Nx workspace.",
    context_settings=config.CONTEXT_SETTINGS,
)


@app.callback(invoke_without_command=True)
def create(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(
            help="Name of the application to create under the apps directory."
        ),
    ] = None,
    root_dir: config.ROOT_DIR_OPTION = None,
    package_manager: config.PACKAGE_MANAGER_OPTION = "yarn",
):
    """
    Generate an Nx Vue 3 application and add Quasar to it.
    """
    if not name:
        LOG.error(USAGE)
        raise typer.Exit(code=1)
    workspace_config = config.workspace_config(
        root_dir=root_dir, package_manager=package_manager
    )
    app_dir = workspace_config.app_dir(name)
    apps_dir = workspace_config.root_dir / workspace_config.apps_dir
    # Ensure the app lands directly inside the apps directory
    if app_dir.resolve().parent != apps_dir.resolve():
        LOG.error(f"Invalid app name: {name}\n{USAGE}")
        raise typer.Exit(code=1)
    if app_dir.exists():
        LOG.error(
            f'An app with the name "{name}" already exists at {workspace_config.apps_dir}'
        )
        raise typer.Exit(code=1)
    if not workspace_config.manifest_path.is_file():
        LOG.error(
            f"No {config.MANIFEST_FILE_NAME} found at the root. "
            "Are you in an Nx workspace?"
        )
        raise typer.Exit(code=1)
    scaffold(name, workspace_config, command.executor(ctx))


def scaffold(name: str, workspace_config: WorkspaceConfig, executor: CommandExecutor):
    """
    Install dependencies, generate the application and patch it for Quasar.

    Preconditions (valid name, absent app directory, present root manifest)
    are checked by the create command. Missing generated files are reported
    and skipped; external command failures propagate.
    """
    root_manifest = Manifest.load(workspace_config.manifest_path)
    manifest.install_missing(
        root_manifest, manifest.RUNTIME_DEPENDENCIES, executor, workspace_config
    )
    manifest.install_missing(
        root_manifest,
        manifest.DEV_DEPENDENCIES,
        executor,
        workspace_config,
        dev=True,
    )
    generate(name, workspace_config, executor)
    app_dir = workspace_config.app_dir(name)
    quasar.patch_entry_point(app_dir)
    quasar.patch_build_config(app_dir)


def generate(name: str, workspace_config: WorkspaceConfig, executor: CommandExecutor):
    """Run the Nx Vue application generator for apps/<name>."""
    options = workspace_config.generator
    args = [
        workspace_config.package_manager,
        workspace_config.nx,
        "g",
        options.generator,
        workspace_config.app_path(name).as_posix(),
        *options.args(),
    ]
    LOG.info(f"Generating Nx Vue 3 app: {name}...")
    executor(args, cwd=workspace_config.root_dir)
    LOG.info(f'Nx Vue app "{name}" created.')


def main():
    app()


if __name__ == "__main__":
    main()
