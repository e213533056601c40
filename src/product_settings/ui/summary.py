from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..settings.model import MODULE_LABELS, ProductSettings


def _format_modules(modules: tuple[str, ...]) -> str:
    if not modules:
        return "none"
    return ", ".join(MODULE_LABELS.get(module, module) for module in modules)


def render_summary(console: Console, settings: ProductSettings, *, path: Path) -> None:
    table = Table(title="Product Settings", show_lines=False, header_style="bold dim")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Name", settings.name)
    table.add_row("Style reference", settings.style_reference_url or "n/a")
    table.add_row("Platform", settings.platform)
    table.add_row("Modules", _format_modules(settings.modules))
    console.print(table)

    source = "file" if path.exists() else "defaults"
    console.print(Text(f"Source: {path} ({source})", style="dim"))
