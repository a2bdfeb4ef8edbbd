FIELD_DELIMITER = ","


def split_fields(line: str) -> list[str]:
    """
    Splits one catalog line into raw fields.

    Only the line terminator is removed ('\\n', '\\r\\n', stray '\\r' from files
    saved on Windows). Field text is otherwise kept byte-for-byte, since course
    numbers compare case- and whitespace-sensitively. No quoting is supported:
    a comma always separates fields.
    """
    return line.rstrip("\r\n").split(FIELD_DELIMITER)


def clean_prereq_tokens(tokens: list[str]) -> list[str]:
    """Drops empty prerequisite tokens (e.g. from 'A,Name,,B' or a trailing comma)."""
    return [t for t in tokens if t]


def normalize_query(raw: str) -> str | None:
    """
    Normalizes a user-typed course number for lookup.

    Trims surrounding whitespace only; case is preserved.
    Returns None for blank input.
    """
    if raw is None:
        return None
    query = str(raw).strip()
    return query or None
