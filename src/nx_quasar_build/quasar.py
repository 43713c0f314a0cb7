"""
Quasar wiring for generated Nx Vue applications.

Defines the patch rules that add Quasar to an application's entry point
(src/main.ts) and Vite configuration (vite.config.ts), plus the default Sass
variables file referenced by the Vite plugin.
"""

import pathlib
import re

from nx_quasar_build import patcher
from nx_quasar_build.patcher import PatchRule
from nx_quasar_build.utils import logger

LOG = logger(__file__)

ENTRY_POINT_PATH = pathlib.Path("src", "main.ts")
BUILD_CONFIG_PATH = pathlib.Path("vite.config.ts")
VARIABLES_PATH = pathlib.Path("src", "quasar-variables.scss")

QUASAR_IMPORT = "import { Quasar } from 'quasar';"
MATERIAL_ICONS_CSS = "@quasar/extras/material-icons/material-icons.css"
VITE_PLUGIN = "@quasar/vite-plugin"

# Default brand palette, keyed by Quasar Sass variable name
PALETTE = {
    "primary": "#1976D2",
    "secondary": "#26A69A",
    "accent": "#9C27B0",
    "dark": "#1D1D1D",
    "positive": "#21BA45",
    "negative": "#C10015",
    "info": "#31CCEC",
    "warning": "#F2C037",
}

ENTRY_POINT_RULES = [
    PatchRule.guarded(
        "quasar-import",
        QUASAR_IMPORT.rstrip(";"),
        patcher.insert_after(
            re.escape("import { createApp } from 'vue';"), [QUASAR_IMPORT]
        ),
    ),
    PatchRule.guarded(
        "quasar-css-imports",
        MATERIAL_ICONS_CSS,
        patcher.insert_after(
            re.escape(QUASAR_IMPORT),
            [
                f"import '{MATERIAL_ICONS_CSS}';",
                "import 'quasar/src/css/index.sass';",
            ],
        ),
    ),
    PatchRule.guarded(
        "quasar-use",
        "app.use(Quasar",
        patcher.insert_before(
            r"app\.mount\('#.*'\)",
            [
                "app.use(Quasar, {",
                "  plugins: {}, // import Quasar plugins here",
                "});",
            ],
        ),
    ),
]

QUASAR_PLUGIN_ENTRY = "\n".join(
    [
        "    quasar({",
        "      sassVariables: fileURLToPath("
        f"new URL('./{VARIABLES_PATH.as_posix()}', import.meta.url))",
        "    })",
    ]
)

BUILD_CONFIG_RULES = [
    PatchRule.guarded(
        "vite-plugin-imports",
        VITE_PLUGIN,
        patcher.insert_after(
            re.escape("import vue from '@vitejs/plugin-vue';"),
            [
                f"import {{ quasar, transformAssetUrls }} from '{VITE_PLUGIN}';",
                "import { fileURLToPath } from 'node:url';",
            ],
        ),
    ),
    # vue() no longer matches once it carries the template options
    PatchRule.unguarded(
        "vue-transform-asset-urls",
        patcher.replace_all(
            r"\bvue\(\)", "vue({ template: { transformAssetUrls } })"
        ),
    ),
    PatchRule.guarded(
        "quasar-plugin",
        "quasar(",
        patcher.append_plugin(QUASAR_PLUGIN_ENTRY),
    ),
]


def variables_content() -> str:
    return "\n".join(f"${name}: {color};" for name, color in PALETTE.items())


def patch_entry_point(app_dir: pathlib.Path) -> bool:
    """
    Add the Quasar import, CSS imports and app.use(Quasar) call to src/main.ts.

    Returns:
        False if the entry point does not exist.
    """
    path = app_dir / ENTRY_POINT_PATH
    if not patcher.patch_file(path, ENTRY_POINT_RULES):
        return False
    LOG.info(f"Quasar added to {ENTRY_POINT_PATH.name} in {app_dir.name}")
    return True


def patch_build_config(app_dir: pathlib.Path) -> bool:
    """
    Register the Quasar Vite plugin and create the Sass variables file.

    The variables file is only written when it does not exist yet, and not at
    all when vite.config.ts is missing.

    Returns:
        False if the build config does not exist.
    """
    path = app_dir / BUILD_CONFIG_PATH
    if not patcher.patch_file(path, BUILD_CONFIG_RULES):
        return False
    LOG.info(f"Quasar added to {BUILD_CONFIG_PATH.name} in {app_dir.name}")
    if patcher.write_once(app_dir / VARIABLES_PATH, variables_content()):
        LOG.info(
            f"Created {VARIABLES_PATH.name} in {app_dir.name}/{VARIABLES_PATH.parent}"
        )
    return True
