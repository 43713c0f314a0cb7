"""
Workspace configuration for nx-quasar-build.

Commands build a WorkspaceConfig from their CLI options instead of reading the
current directory and tool names from the environment at call sites. Option
values fall back to NX_QUASAR_* environment variables.
"""

import pathlib
from typing import Annotated

import typer
from pydantic import BaseModel, Field

MANIFEST_FILE_NAME = "package.json"
APPS_DIR_NAME = "apps"


class GeneratorOptions(BaseModel):
    """Options passed to the Nx Vue application generator."""

    generator: str = "@nx/vue:app"
    style: str = "scss"
    bundler: str = "vite"
    routing: bool = True
    linter: str = "eslint"
    unit_test_runner: str = "none"
    e2e_test_runner: str = "none"
    interactive: bool = False

    def args(self) -> list[str]:
        return [
            f"--style={self.style}",
            f"--bundler={self.bundler}",
            f"--routing={str(self.routing).lower()}",
            f"--linter={self.linter}",
            f"--unitTestRunner={self.unit_test_runner}",
            f"--e2eTestRunner={self.e2e_test_runner}",
            f"--interactive={str(self.interactive).lower()}",
        ]


class WorkspaceConfig(BaseModel):
    """
    Locations and tool names for one Nx workspace.

    Attributes:
        root_dir: Workspace root containing the root package.json.
        apps_dir: Directory, relative to the root, holding generated applications.
        package_manager: Package manager executable used for installs and nx.
        nx: Task runner executable.
        generator: Options for the application generator.
    """

    root_dir: pathlib.Path = Field(default_factory=pathlib.Path.cwd)
    apps_dir: str = APPS_DIR_NAME
    package_manager: str = "yarn"
    nx: str = "nx"
    generator: GeneratorOptions = Field(default_factory=GeneratorOptions)

    @property
    def manifest_path(self) -> pathlib.Path:
        return self.root_dir / MANIFEST_FILE_NAME

    def app_path(self, name: str) -> pathlib.Path:
        """Workspace relative path of an application, e.g. apps/admin."""
        return pathlib.Path(self.apps_dir) / name

    def app_dir(self, name: str) -> pathlib.Path:
        return self.root_dir / self.app_path(name)


# Commands are typer callbacks, which click parses as groups; groups stop
# reading options at the first positional argument unless this is set.
CONTEXT_SETTINGS = {"allow_interspersed_args": True}

ROOT_DIR_OPTION = Annotated[
    pathlib.Path | None,
    typer.Option(
        "--root-dir",
        "-r",
        hidden=True,
        file_okay=False,
        help="Workspace root directory. Defaults to the current directory.",
    ),
]
PACKAGE_MANAGER_OPTION = Annotated[
    str,
    typer.Option(
        envvar="NX_QUASAR_PACKAGE_MANAGER",
        help="Package manager used to add dependencies and run the generator.",
    ),
]
NX_OPTION = Annotated[
    str,
    typer.Option(
        "--nx",
        envvar="NX_QUASAR_NX",
        help="Nx executable used to run tasks.",
    ),
]


def workspace_config(
    root_dir: pathlib.Path | None = None,
    package_manager: str | None = None,
    nx: str | None = None,
) -> WorkspaceConfig:
    """
    Build a WorkspaceConfig from CLI option values, ignoring unset ones.
    """
    values = {
        "root_dir": root_dir.absolute() if root_dir else None,
        "package_manager": package_manager,
        "nx": nx,
    }
    return WorkspaceConfig(**{k: v for k, v in values.items() if v is not None})
