from __future__ import annotations

import contextlib
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .model import DEFAULT_SETTINGS, ProductSettings, merge_with_defaults

logger = logging.getLogger(__name__)

SETTINGS_DIRNAME = ".aaagent"
SETTINGS_FILENAME = "product-settings.json"


def default_settings_path(workdir: Path) -> Path:
    return workdir / SETTINGS_DIRNAME / SETTINGS_FILENAME


def serialize_settings(settings: ProductSettings) -> str:
    return json.dumps(settings.to_json_obj(), indent=2, ensure_ascii=False) + "\n"


@dataclass(frozen=True, slots=True)
class SettingsStore:
    """Reads and writes one JSON settings file.

    Neither operation raises for I/O or parse problems: `load()` falls back to
    defaults and `save()` returns None.
    """

    path: Path

    @classmethod
    def for_workdir(cls, workdir: Path) -> SettingsStore:
        return cls(default_settings_path(workdir))

    def load(self) -> ProductSettings:
        try:
            loaded = json.loads(self.path.read_text(encoding="utf-8"))
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("No settings file at %s; using defaults", self.path)
            return DEFAULT_SETTINGS
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Failed to load product settings from %s: %s", self.path, exc)
            return DEFAULT_SETTINGS
        if not isinstance(loaded, dict):
            logger.warning("Ignoring product settings at %s: root is not an object", self.path)
            return DEFAULT_SETTINGS
        return merge_with_defaults(loaded)

    def save(self, settings: ProductSettings) -> ProductSettings | None:
        try:
            data = serialize_settings(settings).encode("utf-8")
        except UnicodeEncodeError as exc:
            logger.warning("Refusing to save unencodable product settings: %s", exc)
            return None
        # The target is only replaced once the whole payload is on disk.
        staging = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            staging.write_bytes(data)
            os.replace(staging, self.path)
        except OSError as exc:
            logger.warning("Failed to save product settings to %s: %s", self.path, exc)
            with contextlib.suppress(OSError):
                staging.unlink(missing_ok=True)
            return None
        logger.info("Saved product settings to %s", self.path)
        return settings
