from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from ..models import Artifact, ModuleCoordinate, VersionList


class VersionLister(ABC):
    """
    One repository layout convention. Listers keep no per-lookup state, so a
    single instance can serve many lookups, concurrently if needed.

    get_version_list() returns an empty VersionList when the layout doesn't
    apply or nothing is published; real transport/parse failures raise
    DiscoveryError.
    """

    name = "abstract"

    @abstractmethod
    def applies_to(self, pattern: str) -> bool:
        ...

    @abstractmethod
    def get_version_list(self, coordinate: ModuleCoordinate, pattern: str,
                         artifact: Optional[Artifact] = None) -> VersionList:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def template_attributes(coordinate: ModuleCoordinate, artifact: Optional[Artifact]) -> dict:
    attrs = {}
    if artifact is not None:
        attrs.update(artifact.attributes)
    attrs.update(coordinate.attributes)
    return attrs
