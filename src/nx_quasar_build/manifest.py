"""
Root package manifest dependency checks.

Reads the workspace package.json and determines which requested packages are
missing from both its dependencies and devDependencies sections. Missing
packages are installed with one batched package manager invocation.
"""

import json
import pathlib
from dataclasses import dataclass
from typing import Iterable, Mapping

from benedict import benedict

from nx_quasar_build.command import CommandExecutor
from nx_quasar_build.config import WorkspaceConfig
from nx_quasar_build.utils import logger

LOG = logger(__file__)

DEPENDENCIES_KEY = "dependencies"
DEV_DEPENDENCIES_KEY = "devDependencies"

RUNTIME_DEPENDENCIES = ["quasar", "@quasar/extras"]
DEV_DEPENDENCIES = ["@quasar/vite-plugin", "sass-embedded@^1.80.2"]


@dataclass(frozen=True)
class DependencyRequest:
    """
    A package the workspace should declare, with an optional version constraint.
    """

    name: str
    version: str | None = None

    @classmethod
    def parse(cls, spec: str) -> "DependencyRequest":
        """
        Parse a package manager spec such as "sass-embedded@^1.80.2".

        A leading "@" marks a scoped name ("@quasar/extras") and is never
        treated as the version separator.
        """
        spec = spec.strip()
        idx = spec.rfind("@")
        if idx > 0:
            return cls(spec[:idx], spec[idx + 1 :] or None)
        return cls(spec)

    @property
    def spec(self) -> str:
        return f"{self.name}@{self.version}" if self.version else self.name

    def __str__(self):
        return self.spec


class Manifest:
    """
    Read-only view of the runtime and development dependency sections.
    """

    def __init__(self, data: Mapping | None = None):
        self.data = benedict(data or {}, keypath_separator=None)

    @classmethod
    def load(cls, path: pathlib.Path) -> "Manifest":
        LOG.debug("Reading manifest: %s", path)
        return cls(json.loads(path.read_text(encoding="utf-8")))

    @property
    def dependencies(self) -> Mapping[str, str]:
        return dict(self.data.get_dict(DEPENDENCIES_KEY, {}))

    @property
    def dev_dependencies(self) -> Mapping[str, str]:
        return dict(self.data.get_dict(DEV_DEPENDENCIES_KEY, {}))

    def has(self, name: str) -> bool:
        """Check whether a package name is declared in either section."""
        return name in self.dependencies or name in self.dev_dependencies

    def partition(
        self, requests: Iterable[DependencyRequest | str]
    ) -> tuple[list[DependencyRequest], list[DependencyRequest]]:
        """
        Split requests into those already declared and those missing.

        Presence is checked by name only; requested versions are ignored.

        Returns:
            Tuple of (present, missing) in request order.
        """
        present: list[DependencyRequest] = []
        missing: list[DependencyRequest] = []
        for request in _requests(requests):
            (present if self.has(request.name) else missing).append(request)
        return present, missing

    def missing(
        self, requests: Iterable[DependencyRequest | str]
    ) -> list[DependencyRequest]:
        return self.partition(requests)[1]


def install_missing(
    manifest: Manifest,
    requests: Iterable[DependencyRequest | str],
    executor: CommandExecutor,
    config: WorkspaceConfig,
    dev: bool = False,
) -> list[DependencyRequest]:
    """
    Install requested packages that the manifest does not declare.

    Runs a single `<package manager> add [-D] -W <specs...>` command from the
    workspace root, or nothing when every package is already present.

    Returns:
        The requests that were installed.
    """
    kind = "dev" if dev else "runtime"
    missing = manifest.missing(requests)
    if not missing:
        LOG.info(f"All {kind} dependencies already installed.")
        return []
    LOG.info(
        f"Installing {kind} dependencies: {', '.join(r.spec for r in missing)}"
    )
    flags = ["-D", "-W"] if dev else ["-W"]
    executor(
        [config.package_manager, "add", *flags, *(r.spec for r in missing)],
        cwd=config.root_dir,
    )
    return missing


def _requests(
    requests: Iterable[DependencyRequest | str],
) -> Iterable[DependencyRequest]:
    for request in requests:
        if not isinstance(request, DependencyRequest):
            request = DependencyRequest.parse(request)
        yield request
