from __future__ import annotations
import logging
from typing import Optional

from ..errors import NotApplicable
from ..metadata import MavenMetadataLoader
from ..models import Artifact, ModuleCoordinate, VersionList
from ..patterns import M2_METADATA_PATTERN, M2_PATTERN, substitute_tokens
from ..transport import ExternalResourceRepository
from .base import VersionLister

logger = logging.getLogger(__name__)

MAVEN_SUFFIXES = (M2_PATTERN, M2_METADATA_PATTERN)


class MavenVersionLister(VersionLister):
    """
    Reads versions from <root>[organisation]/[module]/maven-metadata.xml instead of
    listing directories. Only used for patterns following the Maven layout.
    """

    name = "maven"

    def __init__(self, repository: ExternalResourceRepository, root: Optional[str] = None,
                 m2compatible: bool = True):
        self.repository = repository
        self.root = root
        self.m2compatible = m2compatible
        self.loader = MavenMetadataLoader(repository)

    def __repr__(self) -> str:
        return f"MavenVersionLister(root={self.root!r})"

    def _suffix(self, pattern: str) -> Optional[str]:
        for suffix in MAVEN_SUFFIXES:
            if pattern.endswith(suffix):
                return suffix
        return None

    def applies_to(self, pattern: str) -> bool:
        return self._suffix(pattern) is not None

    def metadata_location(self, coordinate: ModuleCoordinate, pattern: str) -> str:
        suffix = self._suffix(pattern)
        if suffix is None:
            raise NotApplicable(pattern, message="Pattern does not follow the Maven layout")
        root = self.root if self.root is not None else pattern[: -len(suffix)]
        if self.m2compatible:
            coordinate = coordinate.to_m2()
        # revision-independent: only organisation/module are substituted
        attrs = {"organisation": coordinate.organisation, "module": coordinate.module}
        return substitute_tokens(root + M2_METADATA_PATTERN, attrs)

    def get_version_list(self, coordinate: ModuleCoordinate, pattern: str,
                         artifact: Optional[Artifact] = None) -> VersionList:
        if not self.applies_to(pattern):
            logger.debug("%s: not a Maven pattern, skipping %s", coordinate, pattern)
            return VersionList.empty()
        location = self.metadata_location(coordinate, pattern)
        meta = self.loader.load(location)
        if meta is None:
            return VersionList.empty()
        return VersionList(meta.versions)
