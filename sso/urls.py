from __future__ import annotations

import urllib.parse

from .models import SignedPacket


def append_query_params(url: str, params: dict[str, str]) -> str:
    parsed = urllib.parse.urlparse(url)
    existing = [
        (key, value)
        for key, value in urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
        if key not in params
    ]

    new_query = urllib.parse.urlencode(existing + list(params.items()))
    return urllib.parse.urlunparse(parsed._replace(query=new_query))


def compose_url(base_url: str, packet: SignedPacket) -> str:
    return append_query_params(base_url, packet.as_query())
