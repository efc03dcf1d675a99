"""Source text helpers: decoding file bytes and slicing lines."""

from typing import Optional

from complex_code_spotter.core.exceptions import SourceDecodeError

# Tried in order after UTF-8
FALLBACK_ENCODINGS = ("shift_jis",)


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def decode_source(data: bytes, path: Optional[str] = None) -> str:
    """Decode source bytes into text with LF line endings.

    UTF-8 is tried first (a leading BOM is dropped), then each fallback
    encoding.

    Args:
        data: Raw file content
        path: File path, used in error messages

    Returns:
        Decoded text

    Raises:
        SourceDecodeError: If no encoding can decode the bytes
    """
    try:
        return normalize_newlines(data.decode("utf-8-sig"))
    except UnicodeDecodeError:
        pass

    for encoding in FALLBACK_ENCODINGS:
        try:
            return normalize_newlines(data.decode(encoding))
        except UnicodeDecodeError:
            continue

    raise SourceDecodeError("Impossible to complete a non-utf8 conversion", path)


def count_lines(text: str) -> int:
    return text.count("\n") + 1


def slice_lines(text: str, start_line: int, end_line: int) -> str:
    """Return whole lines start_line..end_line (1-based, inclusive) verbatim."""
    lines = text.split("\n")
    return "\n".join(lines[max(start_line - 1, 0):end_line])
