from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence

from .discovery import MavenVersionLister, ResourceVersionLister, VersionLister
from .errors import DiscoveryError
from .models import Artifact, ModuleCoordinate, VersionList
from .transport import ExternalResourceRepository
from .config import repository_root

logger = logging.getLogger(__name__)


def listers_for(repo: Dict[str, Any], repository: ExternalResourceRepository) -> List[VersionLister]:
    """Lister variants for a configured repository, most specific first."""
    layout = repo.get("layout", "maven")
    if layout == "maven":
        root = repository_root(repo) or None
        return [
            MavenVersionLister(repository, root=root),
            ResourceVersionLister(repository, m2compatible=True),
        ]
    if layout == "pattern":
        return [ResourceVersionLister(repository)]
    raise ValueError(f"Unknown layout {layout!r}")


def discover_versions(
    coordinate: ModuleCoordinate,
    pattern: str,
    listers: Sequence[VersionLister],
    artifact: Optional[Artifact] = None,
    *,
    skip_failures: bool = False,
    progress=None,
) -> VersionList:
    """
    Ask each lister in turn; the first non-empty answer wins.

    A DiscoveryError stops the search unless skip_failures is set, in which case
    it is logged and the next lister is tried; if no lister finds anything the
    first failure is re-raised. TemplateError always propagates.
    """
    failures: List[DiscoveryError] = []
    total = len(listers) or 1
    for i, lister in enumerate(listers, start=1):
        if progress: progress(f"{lister.name} {i}/{total} @ {coordinate}")
        try:
            found = lister.get_version_list(coordinate, pattern, artifact)
        except DiscoveryError as e:
            if not skip_failures:
                raise
            logger.warning("%s lister failed for %s: %s", lister.name, coordinate, e)
            failures.append(e)
            continue
        if found:
            logger.debug("%s lister found %d version(s) for %s", lister.name, len(found), coordinate)
            return VersionList.merge(found)
    if failures:
        raise failures[0]
    return VersionList.empty()
