import json
import pathlib
from typing import Any, Callable, Sequence

import pytest

from nx_quasar_build.command import CommandExecutor

MAIN_TS = """import './styles.scss';
import router from './router';
import { createApp } from 'vue';
import App from './app/App.vue';

const app = createApp(App);
app.use(router);
app.mount('#root');
"""

VITE_CONFIG_TS = """/// <reference types='vitest' />
import { defineConfig } from 'vite';
import vue from '@vitejs/plugin-vue';
import { nxViteTsPaths } from '@nx/vite/plugins/nx-tsconfig-paths.plugin';
import { nxCopyAssetsPlugin } from '@nx/vite/plugins/nx-copy-assets.plugin';

export default defineConfig(() => ({
  root: __dirname,
  server: {
    port: 4200,
    host: 'localhost',
  },
  plugins: [vue(), nxViteTsPaths(), nxCopyAssetsPlugin(['*.md'])],
  build: {
    outDir: './dist',
  },
}));
"""


class RecordingExecutor(CommandExecutor):
    """Executor that records commands instead of running them."""

    def __init__(self, on_call: Callable[[list[str]], None] | None = None):
        self.calls: list[tuple[list[str], Any]] = []
        self.on_call = on_call

    def __call__(self, args: Sequence[Any], cwd=None):
        args = [str(arg) for arg in args]
        self.calls.append((args, cwd))
        if self.on_call is not None:
            self.on_call(args)

    @property
    def commands(self) -> list[list[str]]:
        return [args for args, _ in self.calls]


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def workspace(tmp_path: pathlib.Path) -> pathlib.Path:
    """An Nx workspace root with an empty package.json."""
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "workspace", "dependencies": {}, "devDependencies": {}})
    )
    return tmp_path


@pytest.fixture
def generated_app(tmp_path: pathlib.Path) -> pathlib.Path:
    """An application directory as produced by the Nx Vue generator."""
    app_dir = tmp_path / "apps" / "admin"
    (app_dir / "src").mkdir(parents=True)
    (app_dir / "src" / "main.ts").write_text(MAIN_TS)
    (app_dir / "vite.config.ts").write_text(VITE_CONFIG_TS)
    return app_dir
