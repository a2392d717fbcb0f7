"""Tests for header string parsing."""

import pytest

from sse_tester.headers import HeaderParseError, parse_headers


def test_parses_single_pair() -> None:
    """Parses a single key/value pair."""
    assert parse_headers("Authorization: Bearer abc") == {
        "Authorization": "Bearer abc"
    }


def test_parses_multiple_pairs_and_trims() -> None:
    """Trims whitespace around keys and values of every entry."""
    assert parse_headers("  X-One :  1 ,X-Two:2  ") == {"X-One": "1", "X-Two": "2"}


def test_splits_on_first_colon_only() -> None:
    """Keeps colons that appear in the value."""
    assert parse_headers("X-Url: http://example.com:8080") == {
        "X-Url": "http://example.com:8080"
    }


def test_allows_empty_value() -> None:
    """Accepts an entry with an empty value."""
    assert parse_headers("X-Empty:") == {"X-Empty": ""}


@pytest.mark.parametrize("raw", ["", "   "])
def test_empty_input_yields_empty_mapping(raw: str) -> None:
    """Treats empty input as no headers."""
    assert parse_headers(raw) == {}


def test_last_duplicate_wins() -> None:
    """Keeps the value of the last duplicate key."""
    assert parse_headers("X-Key: first, X-Key: second") == {"X-Key": "second"}


@pytest.mark.parametrize(
    "raw",
    [
        "foo",
        ":bar",
        "  : bar",
        "X-Good: 1, missing-colon",
        "X-Good: 1,",
    ],
)
def test_rejects_malformed_entries(raw: str) -> None:
    """Rejects entries without a colon or with an empty key."""
    with pytest.raises(HeaderParseError):
        parse_headers(raw)


@pytest.mark.parametrize(
    "headers",
    [
        {"Authorization": "Bearer token"},
        {"X-Empty": ""},
        {"X-Url": "https://example.com:8443/path", "X-Empty": ""},
        {
            "Authorization": "Bearer token",
            "X-Request-Source": "pipeline",
            "Accept-Language": "en-US",
        },
        {f"X-Header-{n}": f"value {n}" for n in range(20)},
    ],
    ids=["single", "empty-value", "colon-in-value", "several", "many"],
)
def test_round_trips_encoded_mapping(headers: dict[str, str]) -> None:
    """Recovers a mapping encoded as 'k: v' pairs."""
    raw = ", ".join(f"{key}: {value}" for key, value in headers.items())

    assert parse_headers(raw) == headers
