"""repo_versions: discover which versions of a module a remote repository publishes."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("repo-versions")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed as package

from repo_versions.core import (  # noqa: E402
    Artifact,
    DiscoveryError,
    MavenVersionLister,
    ModuleCoordinate,
    ResourceVersionLister,
    TemplateError,
    VersionList,
    VersionLister,
    discover_versions,
)

__all__ = [
    "Artifact",
    "DiscoveryError",
    "MavenVersionLister",
    "ModuleCoordinate",
    "ResourceVersionLister",
    "TemplateError",
    "VersionList",
    "VersionLister",
    "discover_versions",
    "__version__",
]
