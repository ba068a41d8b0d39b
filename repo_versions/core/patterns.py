from __future__ import annotations
import re
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .errors import TemplateError

"""
Location pattern helpers.

A pattern is literal text with bracketed tokens, e.g.
    [organisation]/[module]/[revision]/[artifact]-[revision](-[classifier]).[ext]

- substitute_tokens(pattern, attrs): resolve every token; a missing value is a TemplateError.
- substitute_except_revision(pattern, attrs): same, but [revision] becomes a wildcard marker.
- revision_regex / extract_revision: the inverse; recover [revision] from a resolved string.

Parenthesised text is an optional section: kept when every token inside resolves,
dropped otherwise. There is no escaping; literal brackets/parentheses can't be expressed.
"""

REVISION = "revision"
TOKENS = ("organisation", "organization", "module", "revision",
          "artifact", "classifier", "ext", "type", "branch")
_ALIASES = {"organization": "organisation"}

M2_PATTERN = "[organisation]/[module]/[revision]/[artifact]-[revision](-[classifier]).[ext]"
MAVEN_METADATA_FILE = "maven-metadata.xml"
M2_METADATA_PATTERN = f"[organisation]/[module]/{MAVEN_METADATA_FILE}"

# parsed form: ("lit", text) | ("tok", name) | ("opt", [parts])
Part = Tuple[str, Union[str, list]]


# ---- parsing -----------------------------------------------------------------
def _parse(pattern: str) -> List[Part]:
    parts: List[Part] = []
    stack = parts
    buf: List[str] = []
    i, n = 0, len(pattern)

    def flush() -> None:
        if buf:
            stack.append(("lit", "".join(buf)))
            buf.clear()

    while i < n:
        c = pattern[i]
        if c == "[":
            end = pattern.find("]", i + 1)
            if end < 0:
                raise TemplateError(pattern[i + 1:], pattern, "unterminated token")
            name = pattern[i + 1:end]
            if name not in TOKENS:
                raise TemplateError(name, pattern, "unknown token")
            flush()
            stack.append(("tok", name))
            i = end + 1
            continue
        if c == "(" and stack is parts:
            flush()
            group: List[Part] = []
            parts.append(("opt", group))
            stack = group
        elif c == ")" and stack is not parts:
            flush()
            stack = parts
        else:
            buf.append(c)
        i += 1
    if stack is not parts:
        raise TemplateError("(", pattern, "unterminated optional section")
    flush()
    return parts


def tokens_in(pattern: str) -> List[str]:
    out: List[str] = []
    for kind, val in _parse(pattern):
        if kind == "tok":
            out.append(_ALIASES.get(val, val))
        elif kind == "opt":
            out.extend(_ALIASES.get(v, v) for k, v in val if k == "tok")
    return out


def has_revision_token(pattern: str) -> bool:
    return REVISION in tokens_in(pattern)


def _lookup(name: str, attributes: Mapping[str, str]) -> Optional[str]:
    key = _ALIASES.get(name, name)
    value = attributes.get(key)
    if value is None and key == "organisation":
        value = attributes.get("organization")
    if value is None or value == "":
        return None
    return str(value)


# ---- forward substitution ------------------------------------------------------
def _render(parts: List[Part], attributes: Mapping[str, str], pattern: str,
            wildcard: Optional[str]) -> str:
    out: List[str] = []
    for kind, val in parts:
        if kind == "lit":
            out.append(val)
        elif kind == "tok":
            out.append(_resolve(val, attributes, pattern, wildcard))
        else:
            try:
                out.append(_render(val, attributes, pattern, wildcard))
            except TemplateError:
                continue  # optional section with a missing value is dropped
    return "".join(out)


def _resolve(name: str, attributes: Mapping[str, str], pattern: str,
             wildcard: Optional[str]) -> str:
    if wildcard is not None and name == REVISION:
        return wildcard
    value = _lookup(name, attributes)
    if value is None:
        raise TemplateError(name, pattern)
    return value


def substitute_tokens(pattern: str, attributes: Mapping[str, str]) -> str:
    return _render(_parse(pattern), attributes, pattern, None)


def substitute_except_revision(pattern: str, attributes: Mapping[str, str],
                               wildcard: str = "*") -> str:
    return _render(_parse(pattern), attributes, pattern, wildcard)


# ---- reverse matching ----------------------------------------------------------
def _regex(parts: List[Part], attributes: Mapping[str, str], pattern: str,
           state: Dict[str, bool]) -> str:
    out: List[str] = []
    for kind, val in parts:
        if kind == "lit":
            out.append(re.escape(val))
        elif kind == "tok" and val == REVISION:
            if state.get("seen"):
                out.append("(?P=revision)")
            else:
                state["seen"] = True
                out.append("(?P<revision>.+?)")
        elif kind == "tok":
            out.append(re.escape(_resolve(val, attributes, pattern, None)))
        else:
            snapshot = dict(state)
            try:
                out.append(_regex(val, attributes, pattern, state))
            except TemplateError:
                state.clear()
                state.update(snapshot)
    return "".join(out)


def revision_regex(pattern: str, attributes: Mapping[str, str]) -> "re.Pattern[str]":
    """
    Build an anchored regex that captures [revision] from a resolved location.
    The first occurrence captures (non-greedy, so the first literal match wins),
    later occurrences must repeat the same value.
    """
    state: Dict[str, bool] = {}
    body = _regex(_parse(pattern), attributes, pattern, state)
    if not state.get("seen"):
        raise TemplateError(REVISION, pattern, "pattern has no revision token")
    return re.compile(rf"\A{body}\Z")


def extract_revision(pattern: str, attributes: Mapping[str, str], value: str) -> Optional[str]:
    m = revision_regex(pattern, attributes).match(value)
    return m.group("revision") if m else None


def split_revision_segment(pattern: str) -> Tuple[str, str]:
    """
    Split a pattern after the path segment holding its last [revision] token.
    Returns (head, segment): head ends with that segment, segment is the segment alone.
    Slashes inside optional sections are not segment boundaries.
    """
    idx = pattern.rfind("[" + REVISION + "]")
    if idx < 0:
        raise TemplateError(REVISION, pattern, "pattern has no revision token")
    boundaries: List[int] = []
    depth = 0
    for pos, c in enumerate(pattern):
        if c == "(":
            depth += 1
        elif c == ")":
            depth = max(0, depth - 1)
        elif c == "/" and depth == 0:
            boundaries.append(pos)
    start = max([b for b in boundaries if b < idx], default=-1) + 1
    end = min([b for b in boundaries if b > idx], default=len(pattern))
    return pattern[:end], pattern[start:end]
