from __future__ import annotations

from typing import Mapping, Sequence, Union
from urllib.parse import urlencode

QueryValue = Union[str, int, float, Sequence[str]]
Query = Mapping[str, QueryValue]


def encode_query(query: Query | None) -> str:
    """Percent-encode ``query`` with keys in sorted order.

    Sequence values expand into repeated keys in their given order, so the
    same mapping always yields the same string.
    """
    if not query:
        return ""
    pairs: list[tuple[str, str]] = []
    for key in sorted(query):
        value = query[key]
        if isinstance(value, (list, tuple)):
            pairs.extend((key, str(v)) for v in value)
        else:
            pairs.append((key, str(value)))
    return urlencode(pairs)


def make_url(base_url: str, container: str = "", resource: str = "", query: Query | None = None) -> str:
    parts = [base_url.rstrip("/")]

    container = (container or "").strip("/")
    if container:
        parts.append(container)

    # an empty resource still leaves a trailing slash
    parts.append(resource or "")

    url = "/".join(parts)
    encoded = encode_query(query)
    if encoded:
        url += "?" + encoded
    return url
