from __future__ import annotations
import logging
import xml.etree.ElementTree as ET
from typing import List, Optional

from .errors import ParseFailure, TransportError, TransportFailure
from .models import MavenMetadata
from .transport import ExternalResourceRepository

logger = logging.getLogger(__name__)


def _local(tag: str) -> str:
    # "{http://maven.apache.org/METADATA/1.1.0}metadata" -> "metadata"
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _child(elem: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    if elem is None:
        return None
    for c in elem:
        if _local(c.tag) == name:
            return c
    return None


def _text(elem: Optional[ET.Element], name: str) -> Optional[str]:
    c = _child(elem, name)
    if c is None or c.text is None:
        return None
    return c.text.strip() or None


def parse_maven_metadata(data: bytes, location: str = "") -> MavenMetadata:
    """
    Parse a maven-metadata.xml document.

    groupId and artifactId are required; a missing or blank version list is not an
    error. Versions keep document order and duplicates.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise ParseFailure(location, e) from e
    if _local(root.tag) != "metadata":
        raise ParseFailure(location, ValueError(f"unexpected root element <{_local(root.tag)}>"))

    group_id = _text(root, "groupId")
    artifact_id = _text(root, "artifactId")
    for field_name, value in (("groupId", group_id), ("artifactId", artifact_id)):
        if not value:
            raise ParseFailure(location, ValueError(f"missing <{field_name}>"))

    versioning = _child(root, "versioning")
    versions: List[str] = []
    holder = _child(versioning, "versions")
    if holder is not None:
        for v in holder:
            if _local(v.tag) != "version" or v.text is None:
                continue
            text = v.text.strip()
            if text:
                versions.append(text)

    return MavenMetadata(
        group_id=group_id,
        artifact_id=artifact_id,
        versions=tuple(versions),
        latest=_text(versioning, "latest"),
        release=_text(versioning, "release"),
        last_updated=_text(versioning, "lastUpdated"),
        location=location,
    )


class MavenMetadataLoader:
    def __init__(self, repository: ExternalResourceRepository):
        self.repository = repository

    def load(self, location: str) -> Optional[MavenMetadata]:
        """Fetch and parse the index at location. None means nothing is published there."""
        try:
            data = self.repository.fetch(location)
        except TransportError as e:
            raise TransportFailure(location, e) from e
        if data is None:
            logger.debug("No Maven metadata at %s", location)
            return None
        meta = parse_maven_metadata(data, location)
        logger.debug("Loaded %s: %d version(s)", location, len(meta.versions))
        return meta
