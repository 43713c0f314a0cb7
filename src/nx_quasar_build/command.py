"""
External command execution.

Scaffolding and task commands delegate to external tools (package manager,
project generator, task runner) through a narrow CommandExecutor capability so
that patch and validation logic can run without the real binaries installed.
"""

import os
import pathlib
import subprocess
from abc import ABC, abstractmethod
from os import PathLike
from typing import Any, Sequence

import typer

from nx_quasar_build import utils
from nx_quasar_build.utils import logger

LOG = logger(__file__)


class CommandExecutor(ABC):
    """
    Runs one external command to completion.

    Implementations block until the command exits and raise
    subprocess.CalledProcessError on a non-zero exit status.
    """

    @abstractmethod
    def __call__(self, args: Sequence[Any], cwd: PathLike | str | None = None):
        pass


class SubprocessExecutor(CommandExecutor):
    """
    Executor backed by subprocess with inherited standard streams.

    No timeout is applied and output is not captured, so the external tool's
    own diagnostics reach the terminal unchanged.
    """

    def __call__(self, args: Sequence[Any], cwd: PathLike | str | None = None):
        process_args = [
            os.fspath(arg) if isinstance(arg, PathLike) else str(arg) for arg in args
        ]
        if executable := utils.which(process_args[0]):
            process_args[0] = str(executable)
        LOG.debug("Executing command: %s cwd:%s", process_args, cwd)
        subprocess.run(process_args, cwd=cwd, check=True)


def executor(ctx: typer.Context | None = None) -> CommandExecutor:
    """
    Resolve the executor for a command invocation.

    An executor supplied as the click context object (for example through
    CliRunner.invoke(..., obj=executor)) takes precedence over the default
    subprocess executor.
    """
    if ctx is not None:
        if ctx_executor := ctx.find_object(CommandExecutor):
            return ctx_executor
    return SubprocessExecutor()


def format_args(args: Sequence[Any]) -> str:
    """Render command arguments as a single display string."""
    return " ".join(
        arg.as_posix() if isinstance(arg, pathlib.PurePath) else str(arg)
        for arg in args
    )
