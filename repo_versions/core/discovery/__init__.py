# repo_versions/core/discovery/__init__.py

from .base import VersionLister
from .maven import MavenVersionLister, MAVEN_SUFFIXES
from .pattern import ResourceVersionLister

__all__ = [
    "VersionLister",
    "MavenVersionLister",
    "MAVEN_SUFFIXES",
    "ResourceVersionLister",
]
