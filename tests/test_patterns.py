"""Tests for location pattern substitution and reverse matching."""

from __future__ import annotations

import pytest

from repo_versions.core.errors import TemplateError
from repo_versions.core.patterns import (
    M2_PATTERN,
    extract_revision,
    has_revision_token,
    revision_regex,
    split_revision_segment,
    substitute_except_revision,
    substitute_tokens,
    tokens_in,
)

ATTRS = {"organisation": "com.acme", "module": "widget"}


class TestSubstituteTokens:
    """Tests for substitute_tokens."""

    def test_simple(self) -> None:
        assert (
            substitute_tokens("repo/[organisation]/[module]/maven-metadata.xml", ATTRS)
            == "repo/com.acme/widget/maven-metadata.xml"
        )

    def test_repeated_token(self) -> None:
        attrs = dict(ATTRS, revision="1.0")
        assert substitute_tokens("[module]/[revision]/[module]-[revision].jar", attrs) == (
            "widget/1.0/widget-1.0.jar"
        )

    def test_organization_alias(self) -> None:
        assert substitute_tokens("[organization]/[module]", ATTRS) == "com.acme/widget"

    def test_alias_value_key(self) -> None:
        assert substitute_tokens("[organisation]", {"organization": "org.x"}) == "org.x"

    def test_missing_value_names_token(self) -> None:
        with pytest.raises(TemplateError) as exc:
            substitute_tokens("repo/[module]-[classifier].jar", ATTRS)
        assert exc.value.token == "classifier"
        assert "[classifier]" in str(exc.value)

    def test_empty_value_is_missing(self) -> None:
        with pytest.raises(TemplateError):
            substitute_tokens("[module]", {"module": ""})

    def test_unknown_token(self) -> None:
        with pytest.raises(TemplateError) as exc:
            substitute_tokens("repo/[flavour]/x", ATTRS)
        assert exc.value.token == "flavour"
        assert exc.value.reason == "unknown token"

    def test_unterminated_token(self) -> None:
        with pytest.raises(TemplateError):
            substitute_tokens("repo/[module", ATTRS)

    def test_no_tokens(self) -> None:
        assert substitute_tokens("plain/text.xml", {}) == "plain/text.xml"

    def test_template_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            substitute_tokens("[module]", {})


class TestOptionalSections:
    """Parenthesised sections are dropped when a token inside is missing."""

    def test_dropped(self) -> None:
        attrs = dict(ATTRS, revision="1.0", artifact="widget", ext="jar")
        assert substitute_tokens(M2_PATTERN, attrs) == "com.acme/widget/1.0/widget-1.0.jar"

    def test_kept(self) -> None:
        attrs = dict(ATTRS, revision="1.0", artifact="widget", ext="jar", classifier="sources")
        assert substitute_tokens(M2_PATTERN, attrs) == "com.acme/widget/1.0/widget-1.0-sources.jar"

    def test_unterminated_section(self) -> None:
        with pytest.raises(TemplateError):
            substitute_tokens("[module](-[classifier]", ATTRS)

    def test_unknown_token_inside_section_still_fails(self) -> None:
        with pytest.raises(TemplateError):
            substitute_tokens("[module](-[bogus])", ATTRS)


class TestSubstituteExceptRevision:
    """Tests for substitute_except_revision."""

    def test_wildcard(self) -> None:
        out = substitute_except_revision("repo/[organisation]/[module]/[revision]/[module]-[revision].jar", ATTRS)
        assert out == "repo/com.acme/widget/*/widget-*.jar"

    def test_revision_attribute_ignored(self) -> None:
        attrs = dict(ATTRS, revision="9.9")
        assert substitute_except_revision("[module]-[revision]", attrs, "%") == "widget-%"

    def test_other_tokens_mandatory(self) -> None:
        with pytest.raises(TemplateError):
            substitute_except_revision("[module]-[revision]-[classifier]", ATTRS)


class TestReverseMatching:
    """Tests for revision_regex and extract_revision."""

    def test_extract(self) -> None:
        assert extract_revision("[module]-[revision].jar", ATTRS, "widget-1.2.3.jar") == "1.2.3"

    def test_shape_mismatch(self) -> None:
        assert extract_revision("[module]-[revision].jar", ATTRS, "readme.txt") is None
        assert extract_revision("[module]-[revision].jar", ATTRS, "widget-1.0.pom") is None
        assert extract_revision("[module]-[revision].jar", ATTRS, "gadget-1.0.jar") is None

    def test_repeated_revision_must_agree(self) -> None:
        pattern = "[module]/[revision]/[module]-[revision].jar"
        assert extract_revision(pattern, ATTRS, "widget/1.0/widget-1.0.jar") == "1.0"
        assert extract_revision(pattern, ATTRS, "widget/1.0/widget-1.1.jar") is None

    def test_literal_characters_escaped(self) -> None:
        assert extract_revision("[module].[revision]", ATTRS, "widgetX1.0") is None

    def test_first_literal_match_wins(self) -> None:
        # '-' also separates revision and classifier; the shortest revision wins
        attrs = dict(ATTRS, classifier="x-y")
        assert extract_revision("[revision]-[classifier]", attrs, "1.0-rc-x-y") == "1.0-rc"
        assert extract_revision("[revision]-[module]", ATTRS, "1-2-widget") == "1-2"

    def test_optional_section_with_revision(self) -> None:
        attrs = dict(ATTRS, artifact="widget", ext="jar")
        assert extract_revision("[artifact]-[revision](-[classifier]).[ext]", attrs, "widget-2.0.jar") == "2.0"

    def test_no_revision_token(self) -> None:
        with pytest.raises(TemplateError):
            revision_regex("[module].jar", ATTRS)

    @pytest.mark.parametrize("revision", ["1.0", "2.0-SNAPSHOT", "1.0.0-beta+exp.sha.5114f85", "r123"])
    def test_round_trip(self, revision: str) -> None:
        pattern = "repo/[organisation]/[module]/[revision]/[module]-[revision].jar"
        resolved = substitute_tokens(pattern, dict(ATTRS, revision=revision))
        assert extract_revision(pattern, ATTRS, resolved) == revision


class TestHelpers:
    """Tests for tokens_in, has_revision_token, split_revision_segment."""

    def test_tokens_in(self) -> None:
        assert tokens_in(M2_PATTERN) == [
            "organisation", "module", "revision", "artifact", "revision", "classifier", "ext",
        ]

    def test_has_revision_token(self) -> None:
        assert has_revision_token("a/[revision]/b") is True
        assert has_revision_token("a/[module]/maven-metadata.xml") is False

    def test_split_last_segment(self) -> None:
        head, seg = split_revision_segment("repo/[module]/[revision]/[module]-[revision].jar")
        assert head == "repo/[module]/[revision]/[module]-[revision].jar"
        assert seg == "[module]-[revision].jar"

    def test_split_directory_segment(self) -> None:
        head, seg = split_revision_segment("repo/[module]/[revision]/ivy.xml")
        assert head == "repo/[module]/[revision]"
        assert seg == "[revision]"

    def test_split_first_segment(self) -> None:
        assert split_revision_segment("[revision]/x") == ("[revision]", "[revision]")

    def test_split_ignores_slash_in_optional_section(self) -> None:
        head, seg = split_revision_segment("[module](/[branch])/[revision]")
        assert seg == "[revision]"
        assert head == "[module](/[branch])/[revision]"

    def test_split_without_revision(self) -> None:
        with pytest.raises(TemplateError):
            split_revision_segment("[module]/x")
