import re
from typing import Any, Dict
from urllib.parse import urlsplit, urlunsplit

from .exceptions import MalformedEntityURIError
from .logger import get_logger
from .models import Destination, Entity, EntityMap, Rank

ONION_SUFFIX = ".onion"
WEB_SCHEMES = {"http", "https"}

RANK_MAP = {
    "http://wikiba.se/ontology#PreferredRank": Rank.PREFERRED,
    "http://wikiba.se/ontology#NormalRank": Rank.NORMAL,
    "http://wikiba.se/ontology#DeprecatedRank": Rank.DEPRECATED,
}

ENTITY_URI_PATTERN = re.compile(r"^.*/entity/(Q[0-9]+)$")


def normalize_url(url: str) -> str:
    """Lowercase scheme and host; an empty path becomes "/".
    Userinfo and port are kept as given.
    """
    parsed = urlsplit(url.strip())
    userinfo, at, hostport = parsed.netloc.rpartition("@")
    netloc = f"{userinfo}{at}{hostport.lower()}"
    path = parsed.path or ("/" if netloc else "")
    return urlunsplit((parsed.scheme.lower(), netloc, path, parsed.query, parsed.fragment))


def is_web_url(url: str) -> bool:
    parsed = urlsplit(url)
    return parsed.scheme.lower() in WEB_SCHEMES and bool(parsed.hostname)


def is_onion(url: str) -> bool:
    # Browsers still cannot open .onion links
    hostname = urlsplit(url).hostname or ""
    return hostname.endswith(ONION_SUFFIX)


def parse_rank(code: str | None) -> Rank:
    if code is None:
        return Rank.UNKNOWN
    return RANK_MAP.get(code, Rank.UNKNOWN)


def generate_permalink(uri: str, base_host: str) -> str:
    """
    Returns the subdomain address of an entity, e.g.
    http://www.wikidata.org/entity/Q42 -> //q42.wikimark.net

    Raises:
        MalformedEntityURIError: If the URI does not end in /entity/Q<digits>.
    """
    m = ENTITY_URI_PATTERN.match(uri)
    if not m:
        raise MalformedEntityURIError(f"Not a Wikidata entity URI: {uri}")
    return f"//{m.group(1).lower()}.{base_host}"


def _value(binding: Dict[str, Any], name: str) -> str | None:
    term = binding.get(name)
    if term is None:
        return None
    return term.get("value")


def transform_sparql_response(response: Dict[str, Any]) -> EntityMap:
    """
    Fold SPARQL result rows into an EntityMap.

    Rows for the same item add websites to the entity created by the first
    row; entity order and website order follow row order. Rows pointing at
    .onion hosts or at non-web URLs contribute nothing.
    """
    logger = get_logger()
    entities = EntityMap()
    skipped = 0

    for binding in response["results"]["bindings"]:
        item_uri = _value(binding, "item")
        website = _value(binding, "website") or ""

        if not is_web_url(website) or is_onion(website):
            skipped += 1
            logger.debug("Skipping website", item=item_uri, website=website)
            continue

        if item_uri not in entities:
            entities.insert(Entity(
                uri=item_uri,
                label=_value(binding, "itemLabel"),
                description=_value(binding, "itemDescription"),
            ))

        entities.add_destination(item_uri, Destination(
            url=normalize_url(website),
            rank=parse_rank(_value(binding, "rank")),
        ))

    if skipped:
        logger.debug(f"Skipped {skipped} unusable websites", entities=len(entities))

    return entities.freeze()
