"""Tests for structural markup validation."""

from bs4 import BeautifulSoup

from regscan.modules.validation import StructuralValidator, css_path, is_interactive

CLEAN_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><title>Home</title></head>
<body>
<h1>Welcome</h1>
<label for="email">Email</label>
<input id="email" type="email" aria-describedby="hint">
<p id="hint">We never share it.</p>
</body>
</html>
"""


def _rules(markup: str) -> list[str]:
    return [issue.rule for issue in StructuralValidator().validate(markup).errors]


class TestStructuralValidator:
    def test_clean_page_is_valid(self) -> None:
        result = StructuralValidator().validate(CLEAN_PAGE)
        assert result.valid
        assert result.errors == ()

    def test_bare_fragment_reports_document_problems(self) -> None:
        rules = _rules("<p>hello</p>")
        assert "missing-doctype" in rules
        assert "missing-lang" in rules
        assert "missing-title" in rules

    def test_missing_lang_points_at_html_element(self) -> None:
        markup = "<!DOCTYPE html>\n<html>\n<head><title>x</title></head><body></body></html>"
        result = StructuralValidator().validate(markup)
        issue = next(issue for issue in result.errors if issue.rule == "missing-lang")
        assert issue.line == 2
        assert issue.column == 1
        assert issue.selector == "html"

    def test_empty_title(self) -> None:
        markup = CLEAN_PAGE.replace("<title>Home</title>", "<title>  </title>")
        assert _rules(markup) == ["missing-title"]

    def test_duplicate_id_reports_second_occurrence(self) -> None:
        markup = CLEAN_PAGE.replace(
            "<h1>Welcome</h1>", '<h1>Welcome</h1>\n<div id="box"></div>\n<div id="box"></div>'
        )
        result = StructuralValidator().validate(markup)
        issues = [issue for issue in result.errors if issue.rule == "no-dup-id"]
        assert len(issues) == 1
        assert issues[0].line == 7
        assert issues[0].selector == "div#box"

    def test_missing_label_target(self) -> None:
        markup = CLEAN_PAGE.replace('<label for="email">', '<label for="phone">')
        result = StructuralValidator().validate(markup)
        assert [issue.rule for issue in result.errors] == ["no-missing-references"]
        assert "phone" in result.errors[0].message

    def test_missing_aria_reference(self) -> None:
        markup = CLEAN_PAGE.replace('aria-describedby="hint"', 'aria-describedby="hint gone"')
        result = StructuralValidator().validate(markup)
        assert len(result.errors) == 1
        assert 'aria-describedby="gone"' in result.errors[0].message
        assert result.errors[0].selector == "#email"

    def test_empty_heading(self) -> None:
        markup = CLEAN_PAGE.replace("<h1>Welcome</h1>", "<h1>Welcome</h1>\n<h2> </h2>")
        assert _rules(markup) == ["empty-heading"]

    def test_heading_with_image_alt_is_not_empty(self) -> None:
        markup = CLEAN_PAGE.replace("<h1>Welcome</h1>", '<h1><img src="l.png" alt="Acme"></h1>')
        assert _rules(markup) == []

    def test_nested_interactive(self) -> None:
        markup = CLEAN_PAGE.replace(
            "<h1>Welcome</h1>", '<h1>Welcome</h1>\n<a href="/x"><button>Go</button></a>'
        )
        result = StructuralValidator().validate(markup)
        assert [issue.rule for issue in result.errors] == ["nested-interactive"]
        assert "<button>" in result.errors[0].message

    def test_errors_are_sorted_by_position(self) -> None:
        result = StructuralValidator().validate("<p>x</p>")
        positions = [(issue.line, issue.column, issue.rule) for issue in result.errors]
        assert positions == sorted(positions)


class TestHelpers:
    def test_css_path_uses_nth_of_type_for_siblings(self) -> None:
        soup = BeautifulSoup("<main><p>a</p><p>b</p></main>", "html.parser")
        second = soup.find_all("p")[1]
        assert css_path(second) == "main > p:nth-of-type(2)"

    def test_css_path_distinguishes_identical_siblings(self) -> None:
        soup = BeautifulSoup("<div><span></span><span></span></div>", "html.parser")
        spans = soup.find_all("span")
        assert css_path(spans[0]) == "div > span:nth-of-type(1)"
        assert css_path(spans[1]) == "div > span:nth-of-type(2)"

    def test_css_path_stops_at_id_anchor(self) -> None:
        soup = BeautifulSoup('<div id="app"><section><h2></h2></section></div>', "html.parser")
        assert css_path(soup.find("h2")) == "#app > section > h2"

    def test_is_interactive(self) -> None:
        soup = BeautifulSoup(
            '<a>no href</a><a href="/">link</a><input type="hidden"><div role="button"></div>',
            "html.parser",
        )
        anchor_plain, anchor_link, hidden, div = soup.find_all(True)
        assert not is_interactive(anchor_plain)
        assert is_interactive(anchor_link)
        assert not is_interactive(hidden)
        assert is_interactive(div)
