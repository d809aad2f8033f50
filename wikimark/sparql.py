from urllib.parse import urlencode

from .models import Classification

# Official website statements, minus expired (end time) and deprecated ones.
# Label and description are required, rows missing either are dropped.
WEBSITE_PATTERN = """
      SERVICE wikibase:label {{
        bd:serviceParam wikibase:language "{language}" .
        ?item rdfs:label ?itemLabel .
        ?item schema:description ?itemDescription .
      }}

      ?item p:P856 ?statement .
      ?statement ps:P856 ?website .
      ?statement wikibase:rank ?rank .
      FILTER NOT EXISTS {{
        ?statement pq:P582 ?endDate .
      }}
      FILTER(?rank != wikibase:DeprecatedRank)
      FILTER(BOUND(?itemLabel))
      FILTER(BOUND(?itemDescription))"""

SELECT_CLAUSE = "SELECT DISTINCT ?item ?itemLabel ?itemDescription ?website ?endDate ?rank"


def build_search_query(term: str, limit: int = 20, language: str = "en") -> str:
    """
    Returns a SPARQL query running a full-text search for ``term``.
    Items keep the search engine's ordering (?num), then preferred
    statements come before normal ones.
    Note: the term is interpolated as-is; the endpoint sandboxes queries.
    """
    return f"""
    {SELECT_CLAUSE}
    WHERE {{
      SERVICE wikibase:mwapi {{
        bd:serviceParam wikibase:api "Search" .
        bd:serviceParam wikibase:endpoint "www.wikidata.org" .
        bd:serviceParam mwapi:srsearch "{term}" .
        ?item wikibase:apiOutputItem mwapi:title .
        ?num wikibase:apiOrdinal true .
      }}
{WEBSITE_PATTERN.format(language=language)}
    }}
    ORDER BY ASC(?num) DESC(?rank)
    LIMIT {limit}
    """


def build_lookup_query(item_id: str, limit: int = 20, language: str = "en") -> str:
    """Returns a SPARQL query for the websites of a single item (e.g. Q42)."""
    return f"""
    {SELECT_CLAUSE}
    WHERE {{
      BIND(wd:{item_id.upper()} AS ?item)
{WEBSITE_PATTERN.format(language=language)}
    }}
    ORDER BY DESC(?rank)
    LIMIT {limit}
    """


def build_query(
    token: str,
    classification: Classification,
    limit: int = 20,
    language: str = "en",
) -> str:
    if classification is Classification.LOOKUP:
        return build_lookup_query(token, limit=limit, language=language)
    return build_search_query(token, limit=limit, language=language)


def build_request_url(query: str, endpoint: str) -> str:
    return f"{endpoint}?{urlencode({'query': query})}"
