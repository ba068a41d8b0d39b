"""
Rendering for the repo-versions CLI.

- Results table for discovered versions
- Maven metadata summary
- Configured repositories table
- Error panels that say where discovery failed and why
"""

from __future__ import annotations
import json
from typing import Any, Dict

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .core import MavenMetadata, ModuleCoordinate, VersionList
from .core.errors import DiscoveryError, ErrorKind, TemplateError

console = Console()

_KIND_HINT = {
    ErrorKind.TRANSPORT: "repository unreachable or refused the request",
    ErrorKind.PARSE: "repository serves corrupt metadata",
    ErrorKind.NOT_APPLICABLE: "layout does not match the configured pattern",
}


def versions_table(coordinate: ModuleCoordinate, versions: VersionList, source: str = "") -> Table:
    t = Table(title=f"{coordinate}" + (f"  [dim]({escape(source)})[/]" if source else ""),
              box=box.SIMPLE_HEAVY, show_lines=False)
    t.add_column("#", justify="right", style="dim")
    t.add_column("Version", style="bold cyan")
    for i, v in enumerate(versions, start=1):
        t.add_row(str(i), escape(v))
    return t


def show_versions(coordinate: ModuleCoordinate, versions: VersionList, source: str = "",
                  console_: Console = console) -> None:
    if versions.is_empty:
        console_.print(f"[yellow]No versions found for {coordinate}[/]"
                       + (f" [dim]in {escape(source)}[/]" if source else ""))
        return
    console_.print(versions_table(coordinate, versions, source))


def show_metadata(meta: MavenMetadata, console_: Console = console) -> None:
    lines = [
        f"[bold]{meta.group_id}:{meta.artifact_id}[/]",
        f"latest:       {meta.latest or '-'}",
        f"release:      {meta.release or '-'}",
        f"last updated: {meta.last_updated or '-'}",
        f"versions:     {len(meta.versions)}",
    ]
    console_.print(Panel.fit("\n".join(lines), title=escape(meta.location or "maven-metadata.xml"),
                             border_style="cyan"))
    if meta.versions:
        console_.print(escape(", ".join(meta.versions)))


def show_repositories(cfg: Dict[str, Any], console_: Console = console) -> None:
    t = Table(title="Repositories", box=box.SIMPLE_HEAVY)
    t.add_column("Name", style="bold")
    t.add_column("Layout")
    t.add_column("URL / Pattern", overflow="fold")
    default = cfg.get("default_repository")
    for name, repo in sorted((cfg.get("repositories") or {}).items()):
        label = f"{escape(name)} [green](default)[/]" if name == default else escape(name)
        t.add_row(label, repo.get("layout", "maven"), escape(repo.get("pattern") or repo.get("url", "")))
    console_.print(t)


def print_json(data: Dict[str, Any], console_: Console = console) -> None:
    # raw output: no wrapping or markup, so it stays machine-readable
    console_.out(json.dumps(data, indent=2), highlight=False)


def show_error(err: Exception, console_: Console = console) -> None:
    if isinstance(err, DiscoveryError):
        body = (f"[bold]{err.kind.value}[/] failure at [cyan]{escape(err.location)}[/]\n"
                f"{escape(str(err.cause if err.cause is not None else err))}\n"
                f"[dim]{_KIND_HINT[err.kind]}[/]")
        console_.print(Panel.fit(body, title="Discovery failed", border_style="red"))
    elif isinstance(err, TemplateError):
        console_.print(Panel.fit(f"{escape(str(err))}\n[dim]check the repository pattern and artifact options[/]",
                                 title="Pattern error", border_style="red"))
    else:
        console_.print(Panel.fit(escape(str(err)), title="Error", border_style="red"))
