"""URI equivalence.

Two URIs are equivalent when scheme, host and port match exactly, their
paths match after clean-up ("" and "/" are the same path, repeated slashes
collapse) and their query parameters match as a mapping, order ignored,
last value winning for repeated names.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from urllib.parse import parse_qsl, urlsplit

from fluentmatch.config import MatcherSettings
from fluentmatch.equality import compare
from fluentmatch.errors import InvalidArgument
from fluentmatch.reporting import fail_comparison

_SLASHES = re.compile(r"/{2,}")


@dataclass(frozen=True)
class ParsedURI:
    scheme: str
    host: str
    port: int | None
    path: str
    query: dict[str, str] = field(default_factory=dict)


def normalize_path(path: str) -> str:
    path = _SLASHES.sub("/", path)
    return path or "/"


def parse_uri(uri: str) -> ParsedURI:
    if not isinstance(uri, str):
        raise InvalidArgument(f"Expected a URI string, got {type(uri).__qualname__}")
    parts = urlsplit(uri)
    try:
        port = parts.port
    except ValueError as e:
        raise InvalidArgument(f"Invalid port in URI '{uri}': {e}") from None
    return ParsedURI(
        scheme=parts.scheme.lower(),
        host=(parts.hostname or "").lower(),
        port=port,
        path=normalize_path(parts.path),
        query=dict(parse_qsl(parts.query, keep_blank_values=True)),
    )


URIParser = Callable[[str], ParsedURI]


def assert_uris_equivalent(
    expected: str,
    actual: str,
    message: str = "",
    *,
    parser: URIParser = parse_uri,
    settings: MatcherSettings | None = None,
) -> None:
    expected_parts = asdict(parser(expected))
    actual_parts = asdict(parser(actual))
    outcome = compare(expected_parts, actual_parts)
    if not outcome.matched:
        fail_comparison(
            "is equivalent to URI",
            expected,
            actual,
            message,
            outcome=outcome,
            settings=settings,
        )
