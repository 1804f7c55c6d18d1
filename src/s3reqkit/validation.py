"""Bucket-name validation for s3reqkit.

``check_bucket_name`` reports a pass/fail outcome and never raises for
malformed input; ``validate_bucket_name`` wraps it for callers that prefer an
``InvalidBucketName`` exception.

Rules, applied in order (first failure wins):
    1. the name, trimmed of spaces, must be non-empty
    2. 3-63 characters (untrimmed)
    3. must not look like a dotted-quad IP address
    4. must not contain "..", ".-" or "-."
    5. must fully match the strict or the relaxed pattern

The relaxed pattern also admits uppercase, "_" and ":" (legacy names with
port-like suffixes).  The strict pattern is not a simple narrowing of it, so
the two are kept as independent rule sets.
"""

import logging
import re
from dataclasses import dataclass

from s3reqkit import metrics
from s3reqkit.errors import InvalidBucketName
from s3reqkit.strings import printable, trim

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BUCKET_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.\-:]{1,61}[A-Za-z0-9]$")
_BUCKET_STRICT_RE = re.compile(r"^[a-z0-9][a-z0-9.\-]{1,61}[a-z0-9]$")
_IP_RE = re.compile(r"^(\d+\.){3}\d+$")

_MIN_BUCKET_NAME_LEN = 3
_MAX_BUCKET_NAME_LEN = 63
_INVALID_SEQUENCES = ("..", ".-", "-.")


@dataclass(frozen=True)
class BucketNameCheck:
    """Outcome of a bucket-name check.

    Attributes:
        ok: True when the name passed every rule.
        reason: Human-readable failure description ("" on success).
        rule: Short name of the failed rule ("" on success).
    """

    ok: bool
    reason: str = ""
    rule: str = ""

    def __bool__(self) -> bool:
        return self.ok


_PASSED = BucketNameCheck(ok=True)


def _fail(name: str, rule: str, reason: str) -> BucketNameCheck:
    logger.debug(
        "Rejected bucket name %s: %s",
        printable(name),
        reason,
        extra={"bucket": name, "rule": rule},
    )
    metrics.record_bucket_name_check(rule)
    return BucketNameCheck(ok=False, reason=reason, rule=rule)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def check_bucket_name(name: str, strict: bool = False) -> BucketNameCheck:
    """Check a bucket name against S3 naming rules.

    Args:
        name: The candidate bucket name.
        strict: Apply the strict rule set (lowercase letters, digits, "." and
            "-" only), as required for virtual-hosted-style addressing.

    Returns:
        A ``BucketNameCheck``; truthy when the name is valid.
    """
    if not trim(name):
        return _fail(name, "empty", "bucket name cannot be empty")

    if len(name) < _MIN_BUCKET_NAME_LEN:
        return _fail(name, "too_short", "bucket name cannot be less than 3 characters")

    if len(name) > _MAX_BUCKET_NAME_LEN:
        return _fail(name, "too_long", "bucket name cannot be greater than 63 characters")

    if _IP_RE.fullmatch(name):
        return _fail(name, "ip_address", "bucket name cannot be an IP address")

    if any(seq in name for seq in _INVALID_SEQUENCES):
        return _fail(
            name,
            "successive_characters",
            "bucket name contains invalid successive characters '..', '.-' or '-.'",
        )

    if strict:
        if not _BUCKET_STRICT_RE.fullmatch(name):
            return _fail(name, "strict_pattern", "bucket name does not follow S3 standards strictly")
    elif not _BUCKET_RE.fullmatch(name):
        return _fail(name, "pattern", "bucket name does not follow S3 standards")

    metrics.record_bucket_name_check("ok")
    return _PASSED


def validate_bucket_name(name: str, strict: bool = False) -> None:
    """Validate a bucket name, raising on failure.

    Args:
        name: The candidate bucket name.
        strict: Apply the strict rule set.

    Raises:
        InvalidBucketName: With the reason of the first failed rule.
    """
    result = check_bucket_name(name, strict)
    if not result:
        raise InvalidBucketName(name, result.reason)
