"""Tests for removing excluded heading sections."""

from __future__ import annotations

from textwrap import dedent

from notezip.collect.headers import filter_excluded_sections, heading_level


class TestHeadingLevel:
    def test_levels_one_to_six(self) -> None:
        for n in range(1, 7):
            assert heading_level("#" * n + " Title") == (n, "Title")

    def test_seven_hashes_is_not_a_heading(self) -> None:
        assert heading_level("####### Title") is None

    def test_requires_space_after_hashes(self) -> None:
        assert heading_level("#tag") is None
        assert heading_level("##Title") is None

    def test_indented_is_not_a_heading(self) -> None:
        assert heading_level("  # Title") is None

    def test_text_is_trimmed(self) -> None:
        assert heading_level("##   Padded title   ") == (2, "Padded title")


def test_empty_exclusions_return_input_unchanged():
    text = "# A\n[[X]]\n## B\n[[Y]]"
    assert filter_excluded_sections(text, []) is text
    assert filter_excluded_sections(text, ["", "  "]) is text


def test_excluded_section_ends_at_same_level():
    text = "# Keep\n[[X]]\n## Excluded\n[[Y]]\n## Keep2\n[[Z]]"
    result = filter_excluded_sections(text, ["Excluded"])
    assert result == "# Keep\n[[X]]\n## Keep2\n[[Z]]"


def test_heading_line_itself_is_dropped():
    result = filter_excluded_sections("## Private notes\nsecret", ["private"])
    assert result == ""


def test_partial_case_insensitive_match():
    text = "## My PRIVATE stuff\n[[Y]]\n## Public\n[[Z]]"
    assert filter_excluded_sections(text, ["private"]) == "## Public\n[[Z]]"


def test_excluded_section_ends_at_shallower_heading():
    text = dedent(
        """\
        ## Drafts
        [[A]]
        # Top
        [[B]]"""
    )
    assert filter_excluded_sections(text, ["drafts"]) == "# Top\n[[B]]"


def test_deeper_headings_are_consumed_without_evaluation():
    text = dedent(
        """\
        ### Excluded
        [[A]]
        #### Nested keep
        [[B]]
        ##### Deeper
        [[C]]
        ### Sibling
        [[D]]"""
    )
    # "Nested keep" would not match the exclusion but is still inside the
    # level-3 section, so it and everything below it are dropped.
    assert filter_excluded_sections(text, ["excluded"]) == "### Sibling\n[[D]]"


def test_closing_heading_can_start_a_new_skip():
    text = "## Secret one\n[[A]]\n## Secret two\n[[B]]\n## Open\n[[C]]"
    assert filter_excluded_sections(text, ["secret"]) == "## Open\n[[C]]"


def test_lines_before_first_heading_are_kept():
    text = "intro [[A]]\n## Hidden\n[[B]]"
    assert filter_excluded_sections(text, ["hidden"]) == "intro [[A]]"


def test_skip_runs_to_end_of_text():
    text = "# Title\n## Archive\n[[A]]\n\nmore"
    assert filter_excluded_sections(text, ["archive"]) == "# Title"


def test_any_of_several_substrings():
    text = "## Todo\n[[A]]\n## Scratch\n[[B]]\n## Notes\n[[C]]"
    assert filter_excluded_sections(text, ["todo", "scratch"]) == "## Notes\n[[C]]"
