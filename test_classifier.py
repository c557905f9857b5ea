"""Unit tests for the table classifier."""

import pytest

from confluence_counter.classifier import Classifier, classify, parse_count
from conftest import table


class TestParseCount:

    @pytest.mark.parametrize("text, expected", [
        ("4", 4.0),
        ("3.5", 3.5),
        ("12 tests", 12.0),
        (".5", 0.5),
        ("1e2", 100.0),
        ("  7  ", 7.0),
    ])
    def test_leading_number(self, text, expected):
        assert parse_count(text) == expected

    @pytest.mark.parametrize("text", ["N/A", "", "-", "tests: 12", "Infinity"])
    def test_not_a_number(self, text):
        assert parse_count(text) is None


class TestClassify:

    def test_empty_content(self):
        counts = classify("")
        assert counts.counts == {"unit": 0.0, "wdio": 0.0}

    def test_no_tables(self):
        counts = classify("<p>no tables</p>")
        assert counts.unit_count == 0
        assert counts.wdio_count == 0

    def test_none_content(self):
        assert classify(None).total == 0

    def test_exact_unit_label(self):
        counts = classify(table(("unit", 9)))
        assert counts.unit_count == 9
        assert counts.wdio_count == 0

    def test_wdio_fractional_case_insensitive(self):
        counts = classify("<table><tr><td>WDIO</td><td>3.5</td></tr></table>")
        assert counts.wdio_count == 3.5
        assert counts.unit_count == 0

    def test_non_numeric_count_is_ignored(self):
        counts = classify(table(("Unit", "N/A"), ("Unit", 2)))
        assert counts.unit_count == 2

    def test_substring_label_match(self):
        counts = classify(table(("Unit Tests", 5), ("unit_count", 1), ("WDIO e2e", 2)))
        assert counts.unit_count == 6
        assert counts.wdio_count == 2

    def test_label_matching_both_categories(self):
        counts = classify(table(("unit-wdio-combo", 4)))
        assert counts.unit_count == 4
        assert counts.wdio_count == 4

    def test_negative_count_is_ignored(self):
        counts = classify(table(("Unit", -3), ("Unit", 2), ("WDIO", "-0.5")))
        assert counts.unit_count == 2
        assert counts.wdio_count == 0

    def test_count_with_trailing_text(self):
        assert classify(table(("Unit", "12 tests"))).unit_count == 12

    def test_unrelated_labels_contribute_nothing(self):
        counts = classify(table(("Integration", 10), ("Owner", "alice")))
        assert counts.total == 0

    def test_header_cells_and_nested_markup(self):
        content = (
            "<table><tbody>"
            "<tr><th><p><strong>Type</strong></p></th><th><p>Count</p></th></tr>"
            "<tr><th><p><strong>Unit</strong></p></th><td><p><span>7</span></p></td></tr>"
            "</tbody></table>"
        )
        assert classify(content).unit_count == 7

    def test_rows_with_one_cell_are_skipped(self):
        content = "<table><tr><td>Unit 5</td></tr><tr><td>Unit</td><td>1</td></tr></table>"
        assert classify(content).unit_count == 1

    def test_extra_columns_are_ignored(self):
        content = "<table><tr><td>Unit</td><td>3</td><td>99</td></tr></table>"
        assert classify(content).unit_count == 3

    def test_multiple_tables_are_summed(self):
        content = table(("Unit", 2)) + "<p>between</p>" + table(("Unit", 3), ("WDIO", 1))
        counts = classify(content)
        assert counts.unit_count == 5
        assert counts.wdio_count == 1

    def test_uppercase_tags_and_attributes(self):
        content = '<TABLE class="wrapped"><TR><TD colspan="1">Unit</TD><TD>4</TD></TR></TABLE>'
        assert classify(content).unit_count == 4

    def test_multiline_table(self):
        content = "<table>\n  <tr>\n    <td>\n      Unit\n    </td>\n    <td>\n 8\n</td>\n  </tr>\n</table>"
        assert classify(content).unit_count == 8

    def test_nbsp_becomes_space(self):
        content = "<table><tr><td>Unit&nbsp;Tests</td><td>&nbsp;4&nbsp;</td></tr></table>"
        assert classify(content).unit_count == 4

    def test_entities_decode_once(self):
        # &amp;lt; must end up as the literal text "&lt;", not "<"
        classifier = Classifier(categories={"escaped": ["&lt;tag&gt;"], "angled": ["<wdio>"]})
        content = (
            "<table>"
            "<tr><td>&amp;lt;tag&amp;gt;</td><td>2</td></tr>"
            "<tr><td>&lt;WDIO&gt;</td><td>5</td></tr>"
            "</table>"
        )
        counts = classifier.classify(content)
        assert counts.get("escaped") == 2
        assert counts.get("angled") == 5

    def test_other_entities_stay_literal(self):
        content = (
            "<table>"
            "<tr><td>Unit</td><td>&#53;</td></tr>"
            "<tr><td>&#117;nit</td><td>2</td></tr>"
            "<tr><td>Unit &quot;fast&quot;</td><td>&#x33;</td></tr>"
            "</table>"
        )
        assert classify(content).unit_count == 0

    def test_bare_ampersand_in_label(self):
        classifier = Classifier(categories={"rnd": ["r&d"]})
        content = "<table><tr><td>R&D unit</td><td>3</td></tr><tr><td>R&amp;D</td><td>1</td></tr></table>"
        counts = classifier.classify(content)
        assert counts.get("rnd") == 4

    def test_rows_outside_tables_are_ignored(self):
        assert classify("<tr><td>Unit</td><td>3</td></tr>").total == 0

    def test_nested_table_rows_counted_once(self):
        # The inner row belongs to the inner table only. A plain text scan of
        # the outer table would see it again; the structural parser must not.
        content = (
            "<table><tr><td>Suite</td><td>"
            "<table><tr><td>Unit</td><td>5</td></tr></table>"
            "</td></tr></table>"
        )
        counts = classify(content)
        assert counts.unit_count == 5

    def test_nested_table_text_does_not_leak_into_outer_cell(self):
        content = (
            "<table><tr><td>Unit"
            "<table><tr><td>x</td><td>y</td></tr></table>"
            "</td><td>2</td></tr></table>"
        )
        assert classify(content).unit_count == 2

    def test_malformed_markup_does_not_raise(self):
        content = "<table><tr><td>Unit<td>3</tr><tr><td>WDIO</td><td>1"
        counts = classify(content)
        assert counts.unit_count == 3
        assert counts.wdio_count == 1

    def test_confluence_macro_markup(self):
        content = (
            '<ac:structured-macro ac:name="info"><ac:rich-text-body>'
            "<p>Coverage</p></ac:rich-text-body></ac:structured-macro>"
            + table(("Unit", 11))
        )
        assert classify(content).unit_count == 11


class TestCategories:

    def test_every_category_present(self):
        classifier = Classifier(categories={"unit": ["unit"], "wdio": ["wdio"], "e2e": ["e2e"]})
        counts = classifier.classify(table(("Unit", 1)))
        assert counts.counts == {"unit": 1.0, "wdio": 0.0, "e2e": 0.0}

    def test_several_keywords_per_category(self):
        classifier = Classifier(categories={"e2e": ["e2e", "end-to-end"]})
        counts = classifier.classify(table(("E2E", 2), ("End-to-End suite", 3)))
        assert counts.get("e2e") == 5

    def test_keywords_are_lowercased(self):
        classifier = Classifier(categories={"unit": ["UNIT"]})
        assert classifier.classify(table(("unit", 1))).get("unit") == 1

    def test_empty_keyword_matches_nothing(self):
        classifier = Classifier(categories={"all": [""]})
        assert classifier.classify(table(("anything", 4))).get("all") == 0
