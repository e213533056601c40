#!/usr/bin/env python3
from __future__ import annotations

import os
import tempfile
from pathlib import Path

from product_settings.settings.model import ProductSettings
from product_settings.settings.store import SettingsStore
from product_settings.ui.settings_textual import run_product_settings_dialog


def main() -> int:
    verbose = os.environ.get("PRODUCT_SETTINGS_DEMO_VERBOSE", "").strip() == "1"
    with tempfile.TemporaryDirectory(prefix="product-settings-demo-") as tmp:
        store = SettingsStore.for_workdir(Path(tmp))
        store.save(ProductSettings(name="demo-shop", platform="Linux", modules=("i18n",)))

        result = run_product_settings_dialog(store)
        if result is None:
            if verbose:
                print("cancelled")
            return 1
        if verbose:
            print(store.path.read_text(encoding="utf-8"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
