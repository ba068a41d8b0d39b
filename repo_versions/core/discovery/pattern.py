from __future__ import annotations
import logging
from typing import List, Optional

from ..errors import TransportError, TransportFailure
from ..models import Artifact, ModuleCoordinate, VersionList
from ..patterns import (
    has_revision_token, revision_regex, split_revision_segment, substitute_except_revision,
)
from ..transport import ExternalResourceRepository
from .base import VersionLister, template_attributes

logger = logging.getLogger(__name__)


class ResourceVersionLister(VersionLister):
    """
    Lists the resources a pattern could resolve to and reads [revision] back out
    of each location. E.g. for repo/[organisation]/[module]/[revision]/[module]-[revision].jar
    it lists repo/com.acme/widget/*/widget-*.jar and keeps locations shaped like
    repo/com.acme/widget/<revision>/widget-<revision>.jar, so the directory and
    the file name must carry the same revision.
    """

    name = "pattern"

    def __init__(self, repository: ExternalResourceRepository, wildcard: str = "*",
                 m2compatible: bool = False):
        self.repository = repository
        self.wildcard = wildcard
        self.m2compatible = m2compatible

    def applies_to(self, pattern: str) -> bool:
        return has_revision_token(pattern)

    def get_version_list(self, coordinate: ModuleCoordinate, pattern: str,
                         artifact: Optional[Artifact] = None) -> VersionList:
        if not self.applies_to(pattern):
            logger.debug("%s: no [revision] in %s, nothing to list", coordinate, pattern)
            return VersionList.empty()
        if self.m2compatible:
            coordinate = coordinate.to_m2()
        attrs = template_attributes(coordinate, artifact)
        # every token must resolve before anything is listed
        substitute_except_revision(pattern, attrs, self.wildcard)
        head, _ = split_revision_segment(pattern)
        partial = substitute_except_revision(head, attrs, self.wildcard)
        matcher = revision_regex(head, attrs)

        try:
            locations = self.repository.list(partial, self.wildcard)
        except TransportError as e:
            raise TransportFailure(partial, e, message="Unable to list resources") from e

        versions: List[str] = []
        for location in locations:
            m = matcher.match(location)
            if m:
                versions.append(m.group("revision"))
            else:
                logger.debug("Skipping %s: does not match %s", location, head)
        logger.debug("%s: %d version(s) under %s", coordinate, len(versions), partial)
        return VersionList(versions)
