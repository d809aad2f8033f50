"""
Tests for the HTML and console presenters.
"""

from bs4 import BeautifulSoup

from conftest import entity_uri, make_binding, make_payload
from wikimark.normalize import transform_sparql_response
from wikimark.presentation import ConsolePresenter, HtmlPresenter, card_fields, more_results_label


def _parse(presenter: HtmlPresenter) -> BeautifulSoup:
    return BeautifulSoup(presenter.render(), "html.parser")


class TestMoreResultsLabel:
    """Test the collapsible section summary."""

    def test_labels(self):
        assert more_results_label(0) is None
        assert more_results_label(1) == "1 more result"
        assert more_results_label(4) == "4 more results"


class TestCardFields:
    def test_fields(self, python_search_payload):
        top = transform_sparql_response(python_search_payload).top()
        assert card_fields(top, "wikimark.net") == {
            "uri": entity_uri("Q28865"),
            "name": "Python",
            "description": "general-purpose programming language",
            "permalink": "//q28865.wikimark.net",
            "urls": ["https://www.python.org/", "https://python.org/"],
        }


class TestHtmlPresenter:
    """Test the rendered results page."""

    def test_progress(self):
        presenter = HtmlPresenter("wikimark.net")
        presenter.update_progress(None)
        assert not _parse(presenter).find("progress").has_attr("value")

        presenter.update_progress(100)
        assert _parse(presenter).find("progress")["value"] == "100"

        presenter.update_progress(None)
        assert not _parse(presenter).find("progress").has_attr("value")

    def test_status(self):
        presenter = HtmlPresenter("wikimark.net")
        presenter.update_status("Searching...")
        assert _parse(presenter).find(id="status").get_text() == "Searching..."

        presenter.update_status(None)
        assert _parse(presenter).find(id="status").get_text() == ""

    def test_top_and_other_results(self, python_search_payload):
        presenter = HtmlPresenter("wikimark.net")
        presenter.display_results(transform_sparql_response(python_search_payload))
        soup = _parse(presenter)

        top_cards = soup.find(id="topResult").find_all("article")
        assert len(top_cards) == 1
        assert top_cards[0]["data-uri"] == entity_uri("Q28865")
        assert top_cards[0].find("a", class_="permalink")["href"] == "//q28865.wikimark.net"
        assert [a["href"] for a in top_cards[0].select("ul.websites a")] == [
            "https://www.python.org/",
            "https://python.org/",
        ]

        other_cards = soup.find(id="otherResults").find_all("article")
        assert [c["data-uri"] for c in other_cards] == [entity_uri("Q271951")]
        assert soup.find("summary").get_text() == "1 more result"
        assert soup.find("details")["style"] == "display: block"
        assert soup.find(id="results")["style"] == "display: block"

    def test_single_result_keeps_details_hidden(self):
        payload = make_payload(make_binding(entity_uri("Q1"), "https://one.example/"))
        presenter = HtmlPresenter("wikimark.net")
        presenter.display_results(transform_sparql_response(payload))
        soup = _parse(presenter)

        assert soup.find("details")["style"] == "display: none"
        assert soup.find(id="otherResults").find_all("article") == []

    def test_text_is_escaped(self):
        payload = make_payload(make_binding(
            entity_uri("Q1"), "https://one.example/", label="<script>x</script>", description="a & b",
        ))
        presenter = HtmlPresenter("wikimark.net")
        presenter.display_results(transform_sparql_response(payload))
        html = presenter.render()

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "a &amp; b" in html

    def test_empty_map_renders_nothing(self, empty_payload):
        presenter = HtmlPresenter("wikimark.net")
        presenter.display_results(transform_sparql_response(empty_payload))
        assert _parse(presenter).find(id="results")["style"] == "display: none"


class TestConsolePresenter:
    """Test CLI output."""

    def test_prints_cards(self, python_search_payload):
        lines = []
        presenter = ConsolePresenter("wikimark.net", out=lines.append)
        presenter.update_status("Found.")
        presenter.display_results(transform_sparql_response(python_search_payload))

        assert lines[0] == "Found."
        assert lines[1] == "Python (//q28865.wikimark.net)"
        assert "  - https://www.python.org/" in lines
        assert "\n1 more result:" in lines

    def test_ignores_cleared_status_and_partial_progress(self):
        lines = []
        presenter = ConsolePresenter("wikimark.net", out=lines.append)
        presenter.update_status(None)
        presenter.update_progress(None)
        presenter.update_progress(100)
        assert lines == ["[done]"]
