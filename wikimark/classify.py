import re

from .models import Classification

ITEM_ID_PATTERN = re.compile(r"q[0-9]+", re.IGNORECASE)


def strip_base_host(host: str, base_host: str) -> str:
    """Return the subdomain token of ``host``.

    Everything from the last ``.<base_host>`` onwards is removed. A host
    without that suffix (or one that would strip to nothing) is returned
    unchanged.
    """
    suffix = f".{base_host}"
    if suffix not in host:
        return host
    return host.rsplit(suffix, 1)[0] or host


def classify_token(token: str) -> Classification:
    """Item IDs (Q42, q42) anywhere in the token mean a direct lookup."""
    if ITEM_ID_PATTERN.search(token):
        return Classification.LOOKUP
    return Classification.SEARCH
