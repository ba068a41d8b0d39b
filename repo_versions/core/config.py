# repo_versions/core/config.py
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from .patterns import M2_PATTERN

logger = logging.getLogger(__name__)

# ---- schema & defaults -------------------------------------------------------
SCHEMA_VERSION = 1
LAYOUTS = ("maven", "pattern")
DEFAULT_CFG: Dict[str, Any] = {
    "schema": SCHEMA_VERSION,
    "repositories": {      # { "<name>": {url, layout, pattern} }
        "central": {
            "url": "https://repo.maven.apache.org/maven2/",
            "layout": "maven",
        },
    },
    "default_repository": "central",
    "timeout": 15,         # seconds per HTTP request
    "verbose": False,
}

# ---- locations ---------------------------------------------------------------
# Override with env vars:
#   REPO_VERSIONS_CONFIG=<full path to config.json>
#   REPO_VERSIONS_DIR=<directory to place config.json>
def _windows_roaming_dir() -> Path:
    return Path(os.environ.get("APPDATA", Path.home() / "AppData/Roaming"))

def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

def config_dir() -> Path:
    env_dir = os.environ.get("REPO_VERSIONS_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    if os.name == "nt":
        return (_windows_roaming_dir() / "repo_versions").resolve()
    return (_xdg_config_home() / "repo_versions").resolve()

def config_path() -> Path:
    env_path = os.environ.get("REPO_VERSIONS_CONFIG")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return config_dir() / "config.json"

# ---- load / save -------------------------------------------------------------
def _defaults() -> Dict[str, Any]:
    return json.loads(json.dumps(DEFAULT_CFG))  # deep copy

def _merge_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = _defaults()
    repos = dict(out["repositories"])
    repos.update((cfg or {}).get("repositories") or {})
    out.update(cfg or {})
    out["repositories"] = repos
    if "schema" not in out:
        out["schema"] = SCHEMA_VERSION
    return out

def load_cfg() -> Dict[str, Any]:
    p = config_path()
    if not p.exists():
        return _defaults()
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        # If the file is corrupt, keep a .bad copy and start fresh
        logger.warning("Ignoring unreadable config %s: %s", p, e)
        try:
            p.replace(p.with_suffix(".bad.json"))
        except OSError:
            logger.debug("Could not move %s aside", p)
        return _defaults()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: top level is not an object", p)
        return _defaults()
    return _merge_defaults(raw)

def save_cfg(cfg: Dict[str, Any]) -> Path:
    p = config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(".tmp")
    data = _merge_defaults(cfg)
    tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(p)
    return p

# ---- repositories ------------------------------------------------------------
def repository_config(cfg: Dict[str, Any], name_or_url: str = "") -> Dict[str, Any]:
    """
    Resolve a configured repository name, or treat the argument as an ad-hoc
    Maven-layout root URL/path. Empty means the configured default.
    """
    repos = cfg.get("repositories") or {}
    key = name_or_url or cfg.get("default_repository") or ""
    if key in repos:
        repo = dict(repos[key])
        repo.setdefault("name", key)
    elif "/" in key or "\\" in key or ":" in key:
        repo = {"name": key, "url": key, "layout": "maven"}
    else:
        raise ValueError(f"Unknown repository {key!r} (configured: {', '.join(sorted(repos)) or 'none'})")
    repo.setdefault("layout", "maven")
    if repo["layout"] not in LAYOUTS:
        raise ValueError(f"Repository {repo['name']!r}: unknown layout {repo['layout']!r}")
    if not repo.get("url") and not repo.get("pattern"):
        raise ValueError(f"Repository {repo['name']!r} needs a url or a pattern")
    return repo


def repository_root(repo: Dict[str, Any]) -> str:
    url = repo.get("url") or ""
    return url if not url or url.endswith("/") else url + "/"


def pattern_for(repo: Dict[str, Any]) -> str:
    if repo.get("pattern"):
        return repo["pattern"]
    return repository_root(repo) + M2_PATTERN
