"""Tests for documentation comments."""

from __future__ import annotations

from onvif_interfaces.annotations import Documentation, clean_documentation


class TestCleanDocumentation:
    """Tests for clean_documentation."""

    def test_single_line(self) -> None:
        doc = clean_documentation("  Frame rate in frames per second.  ")
        assert doc == Documentation(lines=("Frame rate in frames per second.",))
        assert doc.is_single_line

    def test_strips_markup_and_blank_lines(self) -> None:
        """Test tags are removed and blank lines dropped."""
        doc = clean_documentation("\n  First <b>line</b>\n\n   <br/>\n  Second line\n")
        assert doc is not None
        assert doc.lines == ("First line", "Second line")

    def test_comparison_operators_are_kept(self) -> None:
        """Test decoded angle brackets in prose are not taken for tags."""
        doc = clean_documentation("Accepts values < 10 and > 5.")
        assert doc.lines == ("Accepts values < 10 and > 5.",)

    def test_empty_documentation(self) -> None:
        """Test nothing is returned when no text is left."""
        assert clean_documentation(None) is None
        assert clean_documentation("") is None
        assert clean_documentation("  \n <br/> \n") is None


class TestAsComment:
    """Tests for Documentation.as_comment."""

    def test_single_line_comment(self) -> None:
        doc = Documentation(lines=("Status of a PTZ move.",))
        assert doc.as_comment() == "/** Status of a PTZ move. */"

    def test_block_comment(self) -> None:
        doc = Documentation(lines=("First.", "Second."))
        assert doc.as_comment("  ") == "  /**\n   * First.\n   * Second.\n   */"

    def test_comment_terminator_is_escaped(self) -> None:
        """Test documentation cannot close the comment early."""
        doc = Documentation(lines=("Matches a/*/b paths */ here",))
        comment = doc.as_comment()
        assert comment.count("*/") == 1
        assert comment.endswith(" */")
