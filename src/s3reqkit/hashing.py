"""Digest and encoding helpers used when building signed requests.

A failing hash primitive means the runtime is broken (for example, a FIPS
build of OpenSSL refusing MD5).  Such failures are logged at CRITICAL and
surfaced as ``CryptoFailure`` so the caller aborts rather than send a request
with a missing or wrong digest.
"""

import base64
import hashlib
import logging
import zlib

from s3reqkit.errors import CryptoFailure

logger = logging.getLogger(__name__)

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def _as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected bytes-like object or str, got {type(data).__name__}")


def _digest(name: str, data: bytes | bytearray | memoryview | str) -> bytes:
    """Compute a raw digest with ``hashlib``.

    ``hashlib`` reports an unavailable or refused primitive as ``ValueError``;
    that is escalated.  A bad argument type is the caller's ``TypeError``.
    """
    payload = _as_bytes(data)
    try:
        h = hashlib.new(name)
        h.update(payload)
        return h.digest()
    except ValueError as exc:
        logger.critical("Hash primitive %s failed: %s", name, exc)
        raise CryptoFailure(f"failed to compute {name} digest: {exc}") from exc


def sha256_hash(data: bytes | bytearray | memoryview | str) -> str:
    """Return the lowercase hex SHA-256 digest of ``data``.

    Args:
        data: Payload bytes, or a string which is UTF-8 encoded first.

    Returns:
        64-character lowercase hex string.

    Raises:
        CryptoFailure: If the digest cannot be computed.
        TypeError: If ``data`` is neither bytes-like nor ``str``.
    """
    return _digest("sha256", data).hex()


def md5sum_hash(data: bytes | bytearray | memoryview | str) -> str:
    """Return the base64-encoded MD5 digest of ``data`` (a Content-MD5 value).

    Raises:
        CryptoFailure: If MD5 is unavailable or fails.
    """
    return base64_encode(_digest("md5", data))


def crc32(data: bytes | bytearray | memoryview | str) -> int:
    """Return the unsigned CRC-32 checksum of ``data``."""
    return zlib.crc32(_as_bytes(data)) & 0xFFFFFFFF


def base64_encode(data: bytes | bytearray | memoryview | str) -> str:
    """Standard base64 encoding without line breaks."""
    return base64.b64encode(_as_bytes(data)).decode("ascii")


def to_int(data: bytes | bytearray | memoryview) -> int:
    """Decode the first four bytes of ``data`` as an unsigned big-endian int.

    Raises:
        ValueError: If fewer than four bytes are given.
    """
    raw = bytes(data[:4])
    if len(raw) < 4:
        raise ValueError(f"need at least 4 bytes, got {len(raw)}")
    return int.from_bytes(raw, "big")
