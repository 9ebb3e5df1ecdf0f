"""Unit tests for closure_notifier.notices."""

from __future__ import annotations

from closure_notifier.notices import extract_notices


class TestExtractNotices:
    def test_two_notices_in_document_order(self, make_page) -> None:
        assert extract_notices(make_page("A", "B")) == ["A", "B"]

    def test_no_notices(self, make_page) -> None:
        assert extract_notices(make_page()) == []

    def test_missing_description_region(self) -> None:
        html = '<html><body><div class="plugin-notice">Closed</div></body></html>'
        assert extract_notices(html) == []

    def test_only_direct_children_match(self) -> None:
        html = (
            '<div id="tab-description">'
            '<div class="plugin-notice">Top</div>'
            '<section><div class="plugin-notice">Nested</div></section>'
            "</div>"
        )
        assert extract_notices(html) == ["Top"]

    def test_every_description_region_contributes(self) -> None:
        html = (
            '<div id="tab-description"><div class="plugin-notice">A</div></div>'
            '<div id="tab-description"><div class="plugin-notice">B</div></div>'
        )
        assert extract_notices(html) == ["A", "B"]

    def test_class_marker_is_substring_match(self) -> None:
        html = (
            '<div id="tab-description">'
            '<div class="notice plugin-notice-closed">Closed</div>'
            '<div class="notice">Other</div>'
            "</div>"
        )
        assert extract_notices(html) == ["Closed"]

    def test_nested_markup_flattened_to_text(self) -> None:
        html = (
            '<div id="tab-description">'
            '<div class="plugin-notice"><p>Closed <strong>permanently</strong>.</p></div>'
            "</div>"
        )
        assert extract_notices(html) == ["Closed permanently."]

    def test_malformed_markup_does_not_raise(self) -> None:
        html = '<div id="tab-description"><div class="plugin-notice"><p>Closed<</div><td></tr>'
        result = extract_notices(html)
        assert isinstance(result, list)

    def test_garbage_input(self) -> None:
        assert extract_notices("<<<>>> not html &&& </") == []

    def test_empty_string(self) -> None:
        assert extract_notices("") == []

    def test_deterministic(self, make_page) -> None:
        html = make_page("Closed", "Reason")
        assert extract_notices(html) == extract_notices(html)
