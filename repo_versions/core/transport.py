# repo_versions/core/transport.py
from __future__ import annotations
import logging
import re
import urllib.parse
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from .errors import TransportError

logger = logging.getLogger(__name__)

NOT_FOUND_STATUS = (404, 410)


def join_location(base: str, name: str) -> str:
    if not base:
        return name
    return base.rstrip("/") + "/" + name


def _segment_regex(segment: str, wildcard: str) -> "re.Pattern[str]":
    return re.compile(r"\A" + ".*".join(re.escape(p) for p in segment.split(wildcard)) + r"\Z")


class ExternalResourceRepository(ABC):
    """
    Where resources come from. Concrete repositories only implement fetch()
    and list_directory(); wildcard listing is built on top of the latter.
    """

    @abstractmethod
    def fetch(self, location: str) -> Optional[bytes]:
        """Return the resource bytes, or None when nothing exists at location."""

    @abstractmethod
    def list_directory(self, location: str) -> Optional[List[str]]:
        """Return child names of a directory-like location, or None when it doesn't exist."""

    def list(self, partial_location: str, wildcard: str = "*") -> List[str]:
        """
        Enumerate resources matching a location containing wildcard markers.

        Listing starts at the deepest directory without a wildcard and walks one
        segment at a time. Returns the location of every match (the listing base
        joined with each matched segment), in listing order.
        """
        segments = partial_location.split("/")
        first = next((i for i, s in enumerate(segments) if wildcard in s), None)
        if first is None:
            raise ValueError(f"No wildcard {wildcard!r} in {partial_location!r}")
        base = "/".join(segments[:first])
        if not base and first > 0:
            base = "/"  # absolute path whose first segment is the wildcard
        current = [base]
        for seg in segments[first:-1]:
            nxt: List[str] = []
            for loc in current:
                if wildcard not in seg:
                    nxt.append(join_location(loc, seg))
                    continue
                matcher = _segment_regex(seg, wildcard)
                for name in self._children(loc):
                    if matcher.match(name):
                        nxt.append(join_location(loc, name))
            current = nxt
        last = _segment_regex(segments[-1], wildcard)
        out: List[str] = []
        for loc in current:
            out.extend(join_location(loc, name) for name in self._children(loc) if last.match(name))
        logger.debug("Listed %s: %d match(es)", partial_location, len(out))
        return out

    def _children(self, location: str) -> List[str]:
        names = self.list_directory(location or ".")
        return names or []


# ---- HTTP ------------------------------------------------------------------------
def parse_directory_listing(html: str, base_url: str) -> List[str]:
    """Child names linked from an HTML directory index page."""
    base = base_url.rstrip("/") + "/"
    soup = BeautifulSoup(html, "html.parser")
    seen, out = set(), []
    for a in soup.find_all("a", href=True):
        href = a["href"].strip()
        if not href or href.startswith(("?", "#")):
            continue
        full = urllib.parse.urljoin(base, href)
        full = full.split("?", 1)[0].split("#", 1)[0]
        if not full.startswith(base):
            continue
        name = urllib.parse.unquote(full[len(base):].rstrip("/"))
        if not name or "/" in name or name in (".", ".."):
            continue
        if name not in seen:
            seen.add(name)
            out.append(name)
    return out


class HttpResourceRepository(ExternalResourceRepository):
    def __init__(self, session: Optional[requests.Session] = None, timeout: int = 15):
        if session is None:
            from .http import SESSION
            session = SESSION
        self.session = session
        self.timeout = timeout

    def _get(self, url: str) -> Optional[requests.Response]:
        logger.debug("GET %s", url)
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(url, f"Request failed: {e}") from e
        if r.status_code in NOT_FOUND_STATUS:
            return None
        if r.status_code >= 400:
            raise TransportError(url, f"HTTP {r.status_code}")
        return r

    def fetch(self, location: str) -> Optional[bytes]:
        r = self._get(location)
        return None if r is None else r.content

    def list_directory(self, location: str) -> Optional[List[str]]:
        url = location.rstrip("/") + "/"
        r = self._get(url)
        if r is None:
            return None
        return parse_directory_listing(r.text, url)


# ---- local files -------------------------------------------------------------------
def _to_path(location: str) -> Path:
    if location.startswith("file://"):
        location = urllib.parse.unquote(urllib.parse.urlparse(location).path)
    return Path(location)


class FileResourceRepository(ExternalResourceRepository):
    def fetch(self, location: str) -> Optional[bytes]:
        path = _to_path(location)
        try:
            return path.read_bytes()
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            raise TransportError(location, f"Cannot read file: {e}") from e

    def list_directory(self, location: str) -> Optional[List[str]]:
        path = _to_path(location)
        if not path.is_dir():
            return None
        try:
            return sorted(child.name for child in path.iterdir())
        except OSError as e:
            raise TransportError(location, f"Cannot list directory: {e}") from e


def repository_for(url: str, session: Optional[requests.Session] = None,
                   timeout: int = 15) -> ExternalResourceRepository:
    if url.lower().startswith(("http://", "https://")):
        return HttpResourceRepository(session=session, timeout=timeout)
    return FileResourceRepository()
