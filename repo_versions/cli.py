# repo_versions/cli.py
from __future__ import annotations
import argparse
import logging
from typing import List, Optional

from rich.markup import escape
from rich.status import Status

from . import ui
from .core import (
    Artifact, MavenVersionLister, ModuleCoordinate, discover_versions, listers_for,
    load_cfg, pattern_for, repository_config, repository_for, setup_logging,
)
from .core.config import repository_root
from .core.errors import DiscoveryError, RepoVersionsError, TemplateError

logger = logging.getLogger(__name__)

EXIT_OK, EXIT_DISCOVERY, EXIT_CONFIG = 0, 1, 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="repo-versions",
                                 description="List the versions a repository publishes for a module")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging for core/network")
    sub = ap.add_subparsers(dest="command", required=True)

    def repo_opts(p: argparse.ArgumentParser) -> None:
        p.add_argument("coordinate", help="ORGANISATION:MODULE, e.g. com.google.guava:guava")
        p.add_argument("--repo", default="", help="Configured repository name or a root URL/path")
        p.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    p_list = sub.add_parser("list", help="Discover available versions")
    repo_opts(p_list)
    p_list.add_argument("--pattern", help="Location pattern (overrides the repository's)")
    p_list.add_argument("--layout", choices=("maven", "pattern"), help="Override repository layout")
    p_list.add_argument("--artifact", help="Artifact name (default: module name)")
    p_list.add_argument("--type", default="jar")
    p_list.add_argument("--ext", default="jar")
    p_list.add_argument("--classifier")
    p_list.add_argument("--skip-failures", action="store_true",
                        help="Try the next lister when one fails instead of stopping")

    p_meta = sub.add_parser("metadata", help="Show a module's maven-metadata.xml")
    repo_opts(p_meta)

    sub.add_parser("repos", help="Show configured repositories")
    return ap.parse_args(argv)


def _cmd_list(args: argparse.Namespace, cfg: dict) -> int:
    coordinate = ModuleCoordinate.parse(args.coordinate)
    repo = repository_config(cfg, args.repo)
    if args.layout:
        repo["layout"] = args.layout
    if args.pattern:
        repo["pattern"] = args.pattern
    pattern = pattern_for(repo)
    artifact = Artifact(args.artifact or coordinate.module, type=args.type, ext=args.ext,
                        classifier=args.classifier)
    repository = repository_for(repository_root(repo) or pattern, timeout=int(cfg.get("timeout", 15)))
    listers = listers_for(repo, repository)

    if args.json:
        versions = discover_versions(coordinate, pattern, listers, artifact,
                                     skip_failures=args.skip_failures)
        ui.print_json({"coordinate": str(coordinate), "repository": repo["name"], **versions.to_dict()})
        return EXIT_OK
    with Status("Starting…", console=ui.console) as status:
        versions = discover_versions(coordinate, pattern, listers, artifact,
                                     skip_failures=args.skip_failures,
                                     progress=lambda msg: status.update(msg))
    ui.show_versions(coordinate, versions, repo["name"])
    return EXIT_OK


def _cmd_metadata(args: argparse.Namespace, cfg: dict) -> int:
    coordinate = ModuleCoordinate.parse(args.coordinate)
    repo = repository_config(cfg, args.repo)
    pattern = pattern_for(repo)
    repository = repository_for(repository_root(repo) or pattern, timeout=int(cfg.get("timeout", 15)))
    lister = MavenVersionLister(repository, root=repository_root(repo) or None)
    location = lister.metadata_location(coordinate, pattern)
    meta = lister.loader.load(location)
    if meta is None:
        ui.console.print(f"[yellow]No maven-metadata.xml published at {escape(location)}[/]")
        return EXIT_OK
    if args.json:
        ui.print_json(meta.to_dict())
    else:
        ui.show_metadata(meta)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = load_cfg()
    setup_logging(verbose=args.verbose or bool(cfg.get("verbose")))

    if args.command == "repos":
        ui.show_repositories(cfg)
        return EXIT_OK
    handler = _cmd_list if args.command == "list" else _cmd_metadata
    try:
        return handler(args, cfg)
    except DiscoveryError as e:
        logger.debug("Discovery failed", exc_info=True)
        ui.show_error(e)
        return EXIT_DISCOVERY
    except (TemplateError, ValueError) as e:
        ui.show_error(e)
        return EXIT_CONFIG
    except RepoVersionsError as e:
        ui.show_error(e)
        return EXIT_DISCOVERY
