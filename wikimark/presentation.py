"""
Presenters render progress, status text and result cards.

HtmlPresenter builds the results page served on a token subdomain;
ConsolePresenter prints the same information for the CLI.
"""

from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from .models import Entity, EntityMap
from .normalize import generate_permalink

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"/><title>wikimark</title></head>
<body>
<progress max="100"></progress>
<p id="status"></p>
<div id="results" style="display: none">
<div id="topResult"></div>
<details style="display: none"><summary></summary><div id="otherResults"></div></details>
</div>
</body>
</html>
"""

RESULT_TEMPLATE = """<article class="result">
<h2><a class="permalink"></a></h2>
<p class="description"></p>
<p class="uri"><a></a></p>
<ul class="websites"></ul>
</article>"""


def more_results_label(count: int) -> Optional[str]:
    if count == 0:
        return None
    if count == 1:
        return "1 more result"
    return f"{count} more results"


def card_fields(entity: Entity, base_host: str) -> Dict[str, Any]:
    """Fields shown on one result card."""
    return {
        "uri": entity.uri,
        "name": entity.label,
        "description": entity.description,
        "permalink": generate_permalink(entity.uri, base_host),
        "urls": entity.urls,
    }


class Presenter:
    """Presentation collaborator; subclasses render somewhere concrete."""

    def update_progress(self, progress: Optional[int]) -> None:
        """Set progress (0-100); None means indeterminate."""
        raise NotImplementedError

    def update_status(self, status: Optional[str]) -> None:
        """Set the status line; None clears it."""
        raise NotImplementedError

    def display_results(self, entities: EntityMap) -> None:
        raise NotImplementedError


class HtmlPresenter(Presenter):
    def __init__(self, base_host: str):
        self.base_host = base_host
        self.soup = BeautifulSoup(PAGE_TEMPLATE, "html.parser")

    def update_progress(self, progress: Optional[int]) -> None:
        elem = self.soup.find("progress")
        if progress is None:
            if elem.has_attr("value"):
                del elem["value"]
        else:
            elem["value"] = str(progress)

    def update_status(self, status: Optional[str]) -> None:
        self.soup.find(id="status").string = status or ""

    def _render_card(self, fields: Dict[str, Any]):
        card = BeautifulSoup(RESULT_TEMPLATE, "html.parser").article
        card["data-uri"] = fields["uri"]

        permalink = card.find("a", class_="permalink")
        permalink["href"] = fields["permalink"]
        permalink.string = fields["name"]
        card.find(class_="description").string = fields["description"]

        uri_link = card.find(class_="uri").a
        uri_link["href"] = fields["uri"]
        uri_link.string = fields["uri"]

        websites = card.find("ul", class_="websites")
        for url in fields["urls"]:
            li = self.soup.new_tag("li")
            a = self.soup.new_tag("a", href=url)
            a.string = url
            li.append(a)
            websites.append(li)
        return card

    def display_results(self, entities: EntityMap) -> None:
        top = entities.top()
        if top is None:
            return
        others = entities.others()

        self.soup.find(id="topResult").append(self._render_card(card_fields(top, self.base_host)))

        other_elem = self.soup.find(id="otherResults")
        for entity in others:
            other_elem.append(self._render_card(card_fields(entity, self.base_host)))

        label = more_results_label(len(others))
        if label:
            self.soup.find("details")["style"] = "display: block"
            self.soup.find("summary").string = label

        self.soup.find(id="results")["style"] = "display: block"

    def render(self) -> str:
        return str(self.soup)


class ConsolePresenter(Presenter):
    def __init__(self, base_host: str, out=print):
        self.base_host = base_host
        self.out = out

    def update_progress(self, progress: Optional[int]) -> None:
        # Only completion is worth a line on a terminal
        if progress == 100:
            self.out("[done]")

    def update_status(self, status: Optional[str]) -> None:
        if status:
            self.out(status)

    def _print_card(self, fields: Dict[str, Any]) -> None:
        self.out(f"{fields['name']} ({fields['permalink']})")
        self.out(f"  {fields['description']}")
        self.out(f"  URI: {fields['uri']}")
        for url in fields["urls"]:
            self.out(f"  - {url}")

    def display_results(self, entities: EntityMap) -> None:
        top = entities.top()
        if top is None:
            return
        self._print_card(card_fields(top, self.base_host))

        others: List[Entity] = entities.others()
        label = more_results_label(len(others))
        if label:
            self.out(f"\n{label}:")
            for entity in others:
                self._print_card(card_fields(entity, self.base_host))
