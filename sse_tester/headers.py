"""Parse header configuration strings into mappings."""


class HeaderParseError(ValueError):
    """Raised when a header string is not a list of 'key: value' pairs."""


def parse_headers(raw: str) -> dict[str, str]:
    """Parse comma-separated 'key: value' pairs into a mapping.

    Keys and values are trimmed and the value may itself contain colons. An
    empty string yields an empty mapping. Later duplicates replace earlier
    ones.

    Raises:
        HeaderParseError: If an entry has no colon or an empty key

    """
    if not raw.strip():
        return {}

    headers: dict[str, str] = {}
    for entry in raw.split(","):
        key, sep, value = entry.partition(":")
        key = key.strip()
        if not sep or not key:
            raise HeaderParseError(f"Invalid header entry: {entry.strip()!r}")
        headers[key] = value.strip()

    return headers
