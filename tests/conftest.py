"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Dict, Optional

from wikimark.config import WikimarkConfig
from wikimark.logger import get_logger, reset_logger

PREFERRED = "http://wikiba.se/ontology#PreferredRank"
NORMAL = "http://wikiba.se/ontology#NormalRank"


def entity_uri(qid: str) -> str:
    return f"http://www.wikidata.org/entity/{qid}"


def make_binding(
    item: str,
    website: str,
    rank: Optional[str] = NORMAL,
    label: str = "Label",
    description: str = "Description",
) -> Dict[str, Any]:
    """One SPARQL JSON result row as returned by the query service."""
    binding = {
        "item": {"type": "uri", "value": item},
        "itemLabel": {"xml:lang": "en", "type": "literal", "value": label},
        "itemDescription": {"xml:lang": "en", "type": "literal", "value": description},
        "website": {"type": "uri", "value": website},
    }
    if rank is not None:
        binding["rank"] = {"type": "uri", "value": rank}
    return binding


def make_payload(*bindings) -> Dict[str, Any]:
    return {
        "head": {"vars": ["item", "itemLabel", "itemDescription", "website", "endDate", "rank"]},
        "results": {"bindings": list(bindings)},
    }


@pytest.fixture(autouse=True)
def quiet_logger():
    """Console-free, file-free global logger for every test."""
    reset_logger()
    logger = get_logger(enable_file=False, enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def config() -> WikimarkConfig:
    return WikimarkConfig(base_host="wikimark.net", max_retries=0)


@pytest.fixture
def python_search_payload() -> Dict[str, Any]:
    """Search for "python": language first, then the snake genus."""
    return make_payload(
        make_binding(entity_uri("Q28865"), "https://www.python.org/", PREFERRED,
                     label="Python", description="general-purpose programming language"),
        make_binding(entity_uri("Q28865"), "https://python.org/", NORMAL,
                     label="Python", description="general-purpose programming language"),
        make_binding(entity_uri("Q271951"), "https://example.org/pythons", NORMAL,
                     label="Python", description="genus of reptiles"),
    )


@pytest.fixture
def scenario_payload() -> Dict[str, Any]:
    """E1, E2, then an onion website for E1."""
    return make_payload(
        make_binding(entity_uri("Q1"), "http://a.example/", PREFERRED, label="E1"),
        make_binding(entity_uri("Q2"), "http://b.example/", NORMAL, label="E2"),
        make_binding(entity_uri("Q1"), "http://x.onion/", PREFERRED, label="E1"),
    )


@pytest.fixture
def empty_payload() -> Dict[str, Any]:
    return make_payload()


WIKIMARK_ENV_VARS = [
    "WIKIMARK_BASE_HOST",
    "WIKIMARK_SPARQL_ENDPOINT",
    "WIKIMARK_REDIRECT_DELAY_MS",
    "WIKIMARK_ROW_LIMIT",
    "WIKIMARK_LANGUAGE",
    "WIKIMARK_TIMEOUT",
    "WIKIMARK_MAX_RETRIES",
    "WIKIMARK_REFERRER",
    "WIKIMARK_USER_AGENT",
    "WIKIMARK_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No WIKIMARK_* variables and no .env file in the working directory.

    Variables are registered with monkeypatch first so anything a .env file
    sets during the test is removed again afterwards.
    """
    for name in WIKIMARK_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
