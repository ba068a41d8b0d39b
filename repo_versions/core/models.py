from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ModuleCoordinate:
    organisation: str
    module: str
    extra: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def parse(cls, text: str) -> "ModuleCoordinate":
        """Parse the ``org:module`` notation used on the command line."""
        org, sep, module = (text or "").strip().partition(":")
        if not sep or not org.strip() or not module.strip():
            raise ValueError(f"Expected ORGANISATION:MODULE, got {text!r}")
        return cls(org.strip(), module.strip())

    @property
    def attributes(self) -> Dict[str, str]:
        out = dict(self.extra)
        out["organisation"] = self.organisation
        out["module"] = self.module
        return out

    def to_m2(self) -> "ModuleCoordinate":
        # Maven repositories store group ids as nested directories
        return ModuleCoordinate(self.organisation.replace(".", "/"), self.module, dict(self.extra))

    def __str__(self) -> str:
        return f"{self.organisation}:{self.module}"


@dataclass(frozen=True)
class Artifact:
    name: str
    type: str = "jar"
    ext: str = "jar"
    classifier: Optional[str] = None

    @property
    def attributes(self) -> Dict[str, str]:
        out = {"artifact": self.name, "type": self.type, "ext": self.ext}
        if self.classifier:
            out["classifier"] = self.classifier
        return out


@dataclass(frozen=True)
class VersionList:
    """Discovered version strings, in discovery order. Empty is a valid answer."""

    versions: Tuple[str, ...] = ()

    def __init__(self, versions: Iterable[str] = ()):
        object.__setattr__(self, "versions", tuple(versions))

    @classmethod
    def empty(cls) -> "VersionList":
        return cls(())

    @classmethod
    def merge(cls, *lists: "VersionList") -> "VersionList":
        seen, out = set(), []
        for vl in lists:
            for v in vl:
                if v not in seen:
                    seen.add(v)
                    out.append(v)
        return cls(out)

    @property
    def is_empty(self) -> bool:
        return not self.versions

    def __iter__(self) -> Iterator[str]:
        return iter(self.versions)

    def __len__(self) -> int:
        return len(self.versions)

    def __getitem__(self, index):
        return self.versions[index]

    def __contains__(self, version: object) -> bool:
        return version in self.versions

    def __bool__(self) -> bool:
        return bool(self.versions)

    def to_list(self) -> List[str]:
        return list(self.versions)

    def to_dict(self) -> Dict[str, Any]:
        return {"versions": list(self.versions), "count": len(self.versions)}


@dataclass(frozen=True)
class MavenMetadata:
    group_id: str
    artifact_id: str
    versions: Tuple[str, ...] = ()
    latest: Optional[str] = None
    release: Optional[str] = None
    last_updated: Optional[str] = None
    location: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "groupId": self.group_id,
            "artifactId": self.artifact_id,
            "versions": list(self.versions),
            "latest": self.latest,
            "release": self.release,
            "lastUpdated": self.last_updated,
            "location": self.location,
        }
