"""Tests for the Quasar entry point and Vite config patches."""

from conftest import MAIN_TS, VITE_CONFIG_TS

from nx_quasar_build import patcher, quasar

PATCHED_MAIN_TS = """import './styles.scss';
import router from './router';
import { createApp } from 'vue';
import { Quasar } from 'quasar';
import '@quasar/extras/material-icons/material-icons.css';
import 'quasar/src/css/index.sass';
import App from './app/App.vue';

const app = createApp(App);
app.use(router);
app.use(Quasar, {
  plugins: {}, // import Quasar plugins here
});
app.mount('#root');
"""

PATCHED_VITE_CONFIG_TS = """/// <reference types='vitest' />
import { defineConfig } from 'vite';
import vue from '@vitejs/plugin-vue';
import { quasar, transformAssetUrls } from '@quasar/vite-plugin';
import { fileURLToPath } from 'node:url';
import { nxViteTsPaths } from '@nx/vite/plugins/nx-tsconfig-paths.plugin';
import { nxCopyAssetsPlugin } from '@nx/vite/plugins/nx-copy-assets.plugin';

export default defineConfig(() => ({
  root: __dirname,
  server: {
    port: 4200,
    host: 'localhost',
  },
  plugins: [
    vue({ template: { transformAssetUrls } }),
    nxViteTsPaths(),
    nxCopyAssetsPlugin(['*.md']),
    quasar({
      sassVariables: fileURLToPath(new URL('./src/quasar-variables.scss', import.meta.url))
    })
  ],
  build: {
    outDir: './dist',
  },
}));
"""


def _entry(text):
    return patcher.apply_rules(text, quasar.ENTRY_POINT_RULES)


def _build_config(text):
    return patcher.apply_rules(text, quasar.BUILD_CONFIG_RULES)


def test_entry_point_patch():
    assert _entry(MAIN_TS) == PATCHED_MAIN_TS


def test_entry_point_patch_is_idempotent():
    once = _entry(MAIN_TS)
    assert _entry(once) == once


def test_entry_point_keeps_existing_quasar_import():
    text = MAIN_TS.replace(
        "import App", "import { Quasar } from 'quasar';\nimport App"
    )
    patched = _entry(text)
    assert patched.count("import { Quasar } from 'quasar'") == 1
    assert (
        "import { Quasar } from 'quasar';\n"
        "import '@quasar/extras/material-icons/material-icons.css';\n"
    ) in patched


def test_entry_point_without_mount_is_unchanged_by_use_rule():
    text = "import { createApp } from 'vue';\ncreateApp(App).mount('#root');\n"
    use_rule = quasar.ENTRY_POINT_RULES[2]
    assert use_rule.apply(text) == text
    patched = _entry(text)
    assert "app.use(Quasar" not in patched
    assert _entry(patched) == patched


def test_entry_point_without_anchors_is_unchanged():
    text = "console.log('not a vue app');\n"
    assert _entry(text) == text


def test_build_config_patch():
    assert _build_config(VITE_CONFIG_TS) == PATCHED_VITE_CONFIG_TS


def test_build_config_patch_is_idempotent():
    once = _build_config(VITE_CONFIG_TS)
    assert _build_config(once) == once


def test_build_config_single_plugin():
    patched = _build_config("export default {\n  plugins: [vue()],\n};\n")
    assert patched == (
        "export default {\n"
        "  plugins: [\n"
        "    vue({ template: { transformAssetUrls } }),\n"
        f"{quasar.QUASAR_PLUGIN_ENTRY}\n"
        "  ],\n"
        "};\n"
    )
    assert patched.count("[") == patched.count("]")
    assert patched.count("(") == patched.count(")")
    assert _build_config(patched) == patched


def test_build_config_without_plugins_is_unchanged():
    text = "export default defineConfig({});\n"
    assert _build_config(text) == text


def test_variables_content():
    lines = quasar.variables_content().splitlines()
    assert len(lines) == 8
    assert lines[0] == "$primary: #1976D2;"
    assert lines[-1] == "$warning: #F2C037;"


def test_patch_app_files(generated_app):
    assert quasar.patch_entry_point(generated_app)
    assert quasar.patch_build_config(generated_app)
    assert (generated_app / "src" / "main.ts").read_text() == PATCHED_MAIN_TS
    assert (generated_app / "vite.config.ts").read_text() == PATCHED_VITE_CONFIG_TS
    variables = generated_app / "src" / "quasar-variables.scss"
    assert variables.read_text() == quasar.variables_content()


def test_variables_file_is_never_overwritten(generated_app):
    variables = generated_app / "src" / "quasar-variables.scss"
    variables.write_text("$primary: #000000;")
    assert quasar.patch_build_config(generated_app)
    assert variables.read_text() == "$primary: #000000;"


def test_missing_build_config_skips_variables(generated_app):
    (generated_app / "vite.config.ts").unlink()
    assert not quasar.patch_build_config(generated_app)
    assert not (generated_app / "src" / "quasar-variables.scss").exists()


def test_missing_entry_point(generated_app):
    (generated_app / "src" / "main.ts").unlink()
    assert not quasar.patch_entry_point(generated_app)
    assert not (generated_app / "src" / "main.ts").exists()


def test_build_config_with_commented_plugins():
    text = (
        "export default {\n"
        "  plugins: [\n"
        "    vue(),\n"
        "    // don't remove\n"
        "    nxViteTsPaths(),\n"
        "  ],\n"
        "};\n"
    )
    patched = _build_config(text)
    assert "quasar({" in patched
    assert "// don't remove" in patched
    assert "nxViteTsPaths()," in patched
    assert _build_config(patched) == patched


def test_build_config_rewrites_every_vue_call():
    text = "const a = [vue()];\nconst b = [vue()];\n"
    patched = _build_config(text)
    assert patched == (
        "const a = [vue({ template: { transformAssetUrls } })];\n"
        "const b = [vue({ template: { transformAssetUrls } })];\n"
    )
    assert _build_config(patched) == patched
