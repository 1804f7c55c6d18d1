"""String helpers feeding request canonicalization.

Only operations without a direct ``str`` builtin live here; prefix, suffix,
substring, case and join checks use the builtins.
"""

import urllib.parse

from s3reqkit.errors import InvalidBoolString


def trim(text: str, ch: str = " ") -> str:
    """Strip leading and trailing runs of a single character.

    Unlike ``str.strip()`` with no argument, only ``ch`` is removed; tabs and
    newlines survive when trimming spaces.

    Args:
        text: The string to trim.
        ch: The single character to strip (default: space).

    Returns:
        The trimmed string.
    """
    if len(ch) != 1:
        raise ValueError(f"trim character must be a single character, got {ch!r}")
    return text.strip(ch)


def check_non_empty_string(text: str) -> bool:
    """Return True if ``text`` is non-empty and carries no surrounding spaces."""
    return bool(text) and trim(text) == text


def uri_encode(text: str, encode_slash: bool = True) -> str:
    """S3-compatible URI encoding.

    Characters A-Z, a-z, 0-9, '-', '_', '.', '~' are not encoded.
    All other characters are percent-encoded with uppercase hex over their
    UTF-8 bytes.  Spaces become %20 (not +).

    Args:
        text: The string to encode.
        encode_slash: If True (default), '/' is encoded as %2F.
                     If False, '/' is left as-is.

    Returns:
        The URI-encoded string.
    """
    safe = "-_.~" if encode_slash else "-_.~/"
    return urllib.parse.quote(text, safe=safe)


def encode_path(path: str) -> str:
    """URI-encode an object path segment by segment.

    Empty segments are dropped, so ``a//b`` becomes ``a/b``.  A leading and a
    trailing slash on the input are kept.

    Args:
        path: The raw path.

    Returns:
        The encoded path, or ``""`` for an empty input.
    """
    if not path:
        return ""

    encoded = "/".join(uri_encode(segment) for segment in path.split("/") if segment)
    if path.startswith("/"):
        encoded = "/" + encoded
    if path.endswith("/") and encoded != "/":
        encoded += "/"
    return encoded


def printable(text: str) -> str:
    """Escape non-printable and non-ASCII bytes as ``\\xNN`` for log output."""
    out = []
    for byte in text.encode("utf-8"):
        if byte < 33 or byte > 126:
            out.append(f"\\x{byte:02x}")
        else:
            out.append(chr(byte))
    return "".join(out)


def string_to_bool(text: str) -> bool:
    """Convert "true"/"false" (any case) to a bool.

    Raises:
        InvalidBoolString: For any other input.  This is a fatal contract
            violation by an internal caller, not a user-facing error.
    """
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise InvalidBoolString(text)
