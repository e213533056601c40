from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal, get_args

Platform = Literal["Windows", "Linux"]

PLATFORMS: tuple[Platform, ...] = get_args(Platform)

# Module id -> label shown in the field list.
MODULE_LABELS: dict[str, str] = {
    "sqlite": "SQLite",
    "i18n": "i18n (English & Chinese)",
}


@dataclass(frozen=True, slots=True)
class ProductSettings:
    name: str = "new-project"
    style_reference_url: str = ""
    platform: Platform = "Windows"
    modules: tuple[str, ...] = ()

    def with_name(self, name: str) -> ProductSettings:
        return replace(self, name=name)

    def with_platform(self, platform: Platform) -> ProductSettings:
        if platform not in PLATFORMS:
            raise ValueError(f"Unknown platform: {platform!r}")
        return replace(self, platform=platform)

    def has_module(self, module: str) -> bool:
        return module in self.modules

    def toggle_module(self, module: str) -> ProductSettings:
        """Add `module` if absent, remove it if present."""

        if module in self.modules:
            return replace(self, modules=tuple(m for m in self.modules if m != module))
        return replace(self, modules=(*self.modules, module))

    def to_json_obj(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "styleReferenceUrl": self.style_reference_url,
            "platform": self.platform,
            "modules": list(self.modules),
        }


DEFAULT_SETTINGS = ProductSettings()


def _unique(items: list[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return tuple(seen)


def merge_with_defaults(loaded: dict[str, Any]) -> ProductSettings:
    """Shallow-merge a decoded JSON object over DEFAULT_SETTINGS.

    Keys that are missing or carry the wrong type keep their default. `modules`
    replaces the default list wholesale.
    """

    settings = DEFAULT_SETTINGS
    name = loaded.get("name")
    if isinstance(name, str):
        settings = replace(settings, name=name)
    url = loaded.get("styleReferenceUrl")
    if isinstance(url, str):
        settings = replace(settings, style_reference_url=url)
    platform = loaded.get("platform")
    if platform in PLATFORMS:
        settings = replace(settings, platform=platform)
    modules = loaded.get("modules")
    if isinstance(modules, list) and all(isinstance(m, str) for m in modules):
        settings = replace(settings, modules=_unique(modules))
    return settings
