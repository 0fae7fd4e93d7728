from app.models.schema import DiffRun
from app.services.composer import DiffComposer
from app.services.renderer import get_diff_html, get_diff_tags_html, render_runs


def html(*parts):
    return "".join(f'<span class="diff-{cls}">{text}</span>' for cls, text in parts)


class TestGetDiffTagsHtml:
    """Key rename diff"""

    def test_different_tags(self):
        old, new = get_diff_tags_html("mobile", "phone")
        assert old == '<span class="diff-removed">mobile</span>'
        assert new == '<span class="diff-added">phone</span>'

    def test_contact_suffix_changed(self):
        old, new = get_diff_tags_html("contact:mobile", "contact:phone")
        assert old == '<span class="diff-unchanged">contact:</span><span class="diff-removed">mobile</span>'
        assert new == '<span class="diff-unchanged">contact:</span><span class="diff-added">phone</span>'

    def test_contact_namespace_dropped(self):
        old, new = get_diff_tags_html("contact:mobile", "phone")
        assert old == '<span class="diff-removed">contact:mobile</span>'
        assert new == '<span class="diff-added">phone</span>'


class TestRenderRuns:
    """Span rendering"""

    def test_spaces_and_markup_escaped(self):
        runs = [DiffRun(value="<a> "), DiffRun(value="&", removed=True), DiffRun(value="1", added=True)]
        assert render_runs(runs) == html(
            ("unchanged", "&lt;a&gt;&nbsp;"), ("removed", "&amp;"), ("added", "1"),
        )

    def test_empty(self):
        assert render_runs([]) == ""


class TestGetDiffHtml:
    """Whole field diffs"""

    def test_one_number(self):
        old, new = get_diff_html("023 456 7890", "+37 23 456 7890")
        assert old == html(("removed", "0"), ("unchanged", "23&nbsp;456&nbsp;7890"))
        assert new == html(("added", "+37&nbsp;"), ("unchanged", "23&nbsp;456&nbsp;7890"))

    def test_brackets_and_dashes(self):
        old, new = get_diff_html("(347) 456-7890", "+1 347-456-7890")
        assert old == html(
            ("removed", "("), ("unchanged", "347"), ("removed", ")&nbsp;"), ("unchanged", "456-7890"),
        )
        assert new == html(
            ("added", "+1&nbsp;"), ("unchanged", "347"), ("added", "-"), ("unchanged", "456-7890"),
        )

    def test_two_semicolon_separated_numbers(self):
        old, new = get_diff_html("+32 058 515 592;+32 0473 792 951", "+32 58 51 55 92; +32 473 79 29 51")
        assert old == html(
            ("unchanged", "+32&nbsp;"), ("removed", "0"), ("unchanged", "58&nbsp;515"),
            ("removed", "&nbsp;"), ("unchanged", "592;+32&nbsp;"), ("removed", "0"),
            ("unchanged", "473&nbsp;792"), ("removed", "&nbsp;"), ("unchanged", "951"),
        )
        assert new == html(
            ("unchanged", "+32&nbsp;58&nbsp;51"), ("added", "&nbsp;"), ("unchanged", "55"),
            ("added", "&nbsp;"), ("unchanged", "92;"), ("added", "&nbsp;"),
            ("unchanged", "+32&nbsp;473&nbsp;79"), ("added", "&nbsp;"), ("unchanged", "29"),
            ("added", "&nbsp;"), ("unchanged", "51"),
        )

    def test_slash_separator_replaced(self):
        old, new = get_diff_html("0123 / 4567", "+90 123; +90 4567")
        assert old == html(
            ("removed", "0"), ("unchanged", "123&nbsp;"), ("removed", "/&nbsp;"), ("unchanged", "4567"),
        )
        assert new == html(
            ("added", "+90&nbsp;"), ("unchanged", "123"), ("added", ";"), ("unchanged", "&nbsp;"),
            ("added", "+90&nbsp;"), ("unchanged", "4567"),
        )

    def test_double_zero_to_plus(self):
        old, new = get_diff_html("003235024353;0032485610715", "+32 3 502 43 53; +32 485 61 07 15")
        assert old == html(
            ("removed", "00"), ("unchanged", "3235024353;"), ("removed", "00"), ("unchanged", "32485610715"),
        )
        assert new == html(
            ("added", "+"), ("unchanged", "32"), ("added", "&nbsp;"), ("unchanged", "3"),
            ("added", "&nbsp;"), ("unchanged", "502"), ("added", "&nbsp;"), ("unchanged", "43"),
            ("added", "&nbsp;"), ("unchanged", "53;"), ("added", "&nbsp;+"), ("unchanged", "32"),
            ("added", "&nbsp;"), ("unchanged", "485"), ("added", "&nbsp;"), ("unchanged", "61"),
            ("added", "&nbsp;"), ("unchanged", "07"), ("added", "&nbsp;"), ("unchanged", "15"),
        )

    def test_removed_number(self):
        old, new = get_diff_html("+32 58 51 55 92; +32 473 792 951", "+32 58 51 55 92")
        assert old == html(
            ("unchanged", "+32&nbsp;58&nbsp;51&nbsp;55&nbsp;92"),
            ("removed", ";&nbsp;+32&nbsp;473&nbsp;792&nbsp;951"),
        )
        assert new == html(("unchanged", "+32&nbsp;58&nbsp;51&nbsp;55&nbsp;92"))

    def test_added_number(self):
        old, new = get_diff_html("+32 58 51 55 92", "+32 58 51 55 92; +32 473 792 951")
        assert old == html(("unchanged", "+32&nbsp;58&nbsp;51&nbsp;55&nbsp;92"))
        assert new == html(
            ("unchanged", "+32&nbsp;58&nbsp;51&nbsp;55&nbsp;92"),
            ("added", ";&nbsp;+32&nbsp;473&nbsp;792&nbsp;951"),
        )

    def test_first_of_two_numbers_removed(self):
        """Duplicate dropped: the remaining suggestion lines up with the second number"""
        old, new = get_diff_html("+27 11 984;+27 83 462", "+27 83 462")
        assert old == html(("removed", "+27&nbsp;11&nbsp;984;"), ("unchanged", "+27&nbsp;83&nbsp;462"))
        assert new == html(("unchanged", "+27&nbsp;83&nbsp;462"))

    def test_missing_original(self):
        old, new = get_diff_html(None, "+32 58 51 55 92")
        assert old is None
        assert new == html(("added", "+32&nbsp;58&nbsp;51&nbsp;55&nbsp;92"))

    def test_missing_suggestion(self):
        old, new = get_diff_html("+32 58 51 55 92", None)
        assert old == html(("removed", "+32&nbsp;58&nbsp;51&nbsp;55&nbsp;92"))
        assert new is None

    def test_spaces_added_to_italian_number(self):
        old, new = get_diff_html("0708676778", "+39 070 867 6778")
        assert old == html(("unchanged", "0708676778"))
        assert new == html(
            ("added", "+39&nbsp;"), ("unchanged", "070"), ("added", "&nbsp;"), ("unchanged", "867"),
            ("added", "&nbsp;"), ("unchanged", "6778"),
        )

    def test_double_separator(self):
        old, new = get_diff_html("787-728-1111//787-265-2525", "+1-787-728-1111; +1-787-265-2525")
        assert old == html(("unchanged", "787-728-1111"), ("removed", "//"), ("unchanged", "787-265-2525"))
        assert new == html(
            ("added", "+1-"), ("unchanged", "787-728-1111"), ("added", ";&nbsp;+1-"), ("unchanged", "787-265-2525"),
        )

    def test_double_space_reduced(self):
        old, _ = get_diff_html("+1-209-123-4567  x123", "+1-209-123-4567 x123")
        assert old == html(("unchanged", "+1-209-123-4567&nbsp;"), ("removed", "&nbsp;"), ("unchanged", "x123"))

    def test_comma_separated_extension(self):
        old, new = get_diff_html("+1-209-123-4567, ext 123", "+1-209-123-4567 x123")
        assert old == html(
            ("unchanged", "+1-209-123-4567"), ("removed", ","), ("unchanged", "&nbsp;"), ("removed", "e"),
            ("unchanged", "x"), ("removed", "t&nbsp;"), ("unchanged", "123"),
        )
        assert new == html(("unchanged", "+1-209-123-4567&nbsp;x123"))

    def test_escaped_extension(self):
        _, new = get_diff_html("+1-209-123-4567\\;ext=123", "+1-209-123-4567 x123")
        assert new == html(("unchanged", "+1-209-123-4567"), ("added", "&nbsp;"), ("unchanged", "x123"))

    def test_invisible_characters_shown(self):
        old, new = get_diff_html("0123\u200b456", "+90 123 456")
        assert "\u2423" in old
        assert "\u2423" not in new


class TestDiffComposer:
    """Run level field composition"""

    def setup_method(self):
        self.composer = DiffComposer()

    def test_sides_reconstruct_sanitised_inputs(self):
        original = "+32 058 515 592;+32 0473\u200b 792 951 / 0800 123"
        suggested = "+32 58 51 55 92; +32 473 79 29 51"
        field = self.composer.compose(original, suggested)
        assert "".join(r.value for r in field.original_diff) == original.replace("\u200b", "\u2423")
        assert "".join(r.value for r in field.suggested_diff) == suggested
        assert not any(r.added for r in field.original_diff)
        assert not any(r.removed for r in field.suggested_diff)

    def test_german_profile_used_for_german_suggestion(self):
        field = self.composer.compose("030/1234567", "+49 30 1234567")
        assert field.profile == "de"
        assert field.original_diff == [
            DiffRun(value="0", removed=True), DiffRun(value="30"), DiffRun(value="/", removed=True),
            DiffRun(value="1234567"),
        ]

    def test_both_missing(self):
        field = self.composer.compose(None, "")
        assert field.original_diff == []
        assert field.suggested_diff == []
