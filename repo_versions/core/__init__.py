# repo_versions/core/__init__.py
from .assemble import discover_versions, listers_for
from .config import load_cfg, save_cfg, config_path, repository_config, pattern_for
from .discovery import MavenVersionLister, ResourceVersionLister, VersionLister
from .errors import (
    DiscoveryError, ErrorKind, NotApplicable, ParseFailure, RepoVersionsError,
    TemplateError, TransportError, TransportFailure,
)
from .metadata import MavenMetadataLoader, parse_maven_metadata
from .models import Artifact, MavenMetadata, ModuleCoordinate, VersionList
from .patterns import M2_PATTERN, substitute_tokens, extract_revision
from .transport import (
    ExternalResourceRepository, FileResourceRepository, HttpResourceRepository, repository_for,
)

__all__ = [
    "discover_versions", "listers_for",
    "load_cfg", "save_cfg", "config_path", "repository_config", "pattern_for",
    "MavenVersionLister", "ResourceVersionLister", "VersionLister",
    "DiscoveryError", "ErrorKind", "NotApplicable", "ParseFailure", "RepoVersionsError",
    "TemplateError", "TransportError", "TransportFailure",
    "MavenMetadataLoader", "parse_maven_metadata",
    "Artifact", "MavenMetadata", "ModuleCoordinate", "VersionList",
    "M2_PATTERN", "substitute_tokens", "extract_revision",
    "ExternalResourceRepository", "FileResourceRepository", "HttpResourceRepository",
    "repository_for",
    "setup_logging",
]

# ---- simple logging toggle for the package ----
import logging

def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s"
    )
    # quiet down noisy deps
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
