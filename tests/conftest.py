"""Shared fixtures: in-memory resource repositories."""

from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from repo_versions.core.errors import TransportError
from repo_versions.core.transport import ExternalResourceRepository


class MemoryRepository(ExternalResourceRepository):
    """Files keyed by location; directories are implied by the keys."""

    def __init__(self, files: Optional[Dict[str, bytes]] = None) -> None:
        self.files = dict(files or {})
        self.fetched: List[str] = []
        self.listed: List[str] = []
        self.failing: set[str] = set()

    def fetch(self, location: str) -> Optional[bytes]:
        self.fetched.append(location)
        if location in self.failing:
            raise TransportError(location, "connection refused")
        return self.files.get(location)

    def list_directory(self, location: str) -> Optional[List[str]]:
        self.listed.append(location)
        if location in self.failing:
            raise TransportError(location, "connection refused")
        prefix = location.rstrip("/") + "/"
        names: List[str] = []
        for key in self.files:
            if key.startswith(prefix):
                child = key[len(prefix):].split("/", 1)[0]
                if child not in names:
                    names.append(child)
        return names or None


class StubListingRepository(MemoryRepository):
    """Answers list() with canned names per partial location."""

    def __init__(self, listings: Dict[str, List[str]]) -> None:
        super().__init__()
        self.listings = listings
        self.list_calls: List[str] = []

    def list(self, partial_location: str, wildcard: str = "*") -> List[str]:
        self.list_calls.append(partial_location)
        if partial_location in self.failing:
            raise TransportError(partial_location, "listing refused")
        return list(self.listings.get(partial_location, []))


def maven_metadata(group: str, artifact: str, versions: List[str], latest: str = "",
                   release: str = "") -> bytes:
    body = "".join(f"<version>{v}</version>" for v in versions)
    extra = ""
    if latest:
        extra += f"<latest>{latest}</latest>"
    if release:
        extra += f"<release>{release}</release>"
    return (
        f"<?xml version=\"1.0\" encoding=\"UTF-8\"?>\n<metadata><groupId>{group}</groupId>"
        f"<artifactId>{artifact}</artifactId><versioning>{extra}"
        f"<versions>{body}</versions><lastUpdated>20240101120000</lastUpdated>"
        f"</versioning></metadata>"
    ).encode("utf-8")


@pytest.fixture
def memory_repo() -> MemoryRepository:
    return MemoryRepository()
