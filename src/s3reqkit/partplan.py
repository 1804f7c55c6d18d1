"""Multipart-upload part planning for s3reqkit.

``calc_part_info`` turns an object size (possibly unknown) and an optional
caller-supplied part size into a ``PartPlan`` that stays within the S3
limits below.  ``iter_parts`` then slices a binary stream according to the
plan.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from s3reqkit import metrics
from s3reqkit.errors import EntityTooLarge, InvalidPartSize, S3ClientError, TooManyParts

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIN_PART_SIZE = 5 * 1024 * 1024  # 5 MiB
MAX_PART_SIZE = 5 * 1024 * 1024 * 1024  # 5 GiB
MAX_OBJECT_SIZE = 5 * 1024 * 1024 * 1024 * 1024  # 5 TiB
MAX_MULTIPART_COUNT = 10000


@dataclass(frozen=True)
class PartPlan:
    """Resolved part size and count for one upload.

    Attributes:
        part_size: Bytes per part (the last part may be shorter).
        part_count: Number of parts, or ``None`` when the object size is
            unknown and parts are streamed until EOF.  Never ``0``.
    """

    part_size: int
    part_count: int | None

    @property
    def is_streaming(self) -> bool:
        return self.part_count is None


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def _plan(object_size: int, part_size: int) -> PartPlan:
    if part_size > 0:
        if part_size < MIN_PART_SIZE:
            raise InvalidPartSize(
                f"part size {part_size} is not supported; minimum allowed 5MiB"
            )
        if part_size > MAX_PART_SIZE:
            raise InvalidPartSize(
                f"part size {part_size} is not supported; maximum allowed 5GiB"
            )

    if object_size >= 0:
        if object_size > MAX_OBJECT_SIZE:
            raise EntityTooLarge(
                f"object size {object_size} is not supported; maximum allowed 5TiB"
            )
    elif part_size <= 0:
        raise InvalidPartSize("valid part size must be provided when object size is unknown")

    if object_size < 0:
        return PartPlan(part_size=part_size, part_count=None)

    if part_size <= 0:
        # Smallest multiple of MIN_PART_SIZE covering the object in at most
        # MAX_MULTIPART_COUNT parts.
        per_part = _ceil_div(object_size, MAX_MULTIPART_COUNT)
        part_size = _ceil_div(per_part, MIN_PART_SIZE) * MIN_PART_SIZE

    part_size = min(part_size, object_size)
    part_count = _ceil_div(object_size, part_size) if part_size > 0 else 1
    if part_count > MAX_MULTIPART_COUNT:
        raise TooManyParts(
            f"object size {object_size} and part size {part_size} make more than "
            f"{MAX_MULTIPART_COUNT} parts for upload"
        )
    return PartPlan(part_size=part_size, part_count=part_count)


def calc_part_info(object_size: int, part_size: int = 0) -> PartPlan:
    """Compute the part size and part count for a multipart upload.

    Args:
        object_size: Total object size in bytes; negative when unknown.
        part_size: Requested part size in bytes, or 0 to pick one.

    Returns:
        The resolved ``PartPlan``.  A requested part size larger than the
        object is clamped to the object size (single part).

    Raises:
        InvalidPartSize: If ``part_size`` is outside [5 MiB, 5 GiB], or the
            object size is unknown and no part size was given.
        EntityTooLarge: If ``object_size`` exceeds 5 TiB.
        TooManyParts: If the plan would need more than 10000 parts.
    """
    try:
        plan = _plan(object_size, part_size)
    except S3ClientError as exc:
        logger.debug("Part planning failed: %s", exc.message, extra={"object_size": object_size})
        metrics.record_part_plan(exc.code)
        raise

    logger.debug(
        "Planned upload: object_size=%d part_size=%d part_count=%s",
        object_size,
        plan.part_size,
        plan.part_count,
        extra={
            "object_size": object_size,
            "part_size": plan.part_size,
            "part_count": plan.part_count,
        },
    )
    metrics.record_part_plan("streaming" if plan.is_streaming else "planned")
    return plan


# ---------------------------------------------------------------------------
# Stream slicing
# ---------------------------------------------------------------------------


def read_part(stream: BinaryIO, size: int) -> bytes:
    """Read up to ``size`` bytes, retrying short reads until EOF.

    Args:
        stream: A binary file-like object.
        size: Maximum number of bytes to read.

    Returns:
        The bytes read; shorter than ``size`` only at end of stream.
    """
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def iter_parts(stream: BinaryIO, plan: PartPlan) -> Iterator[bytes]:
    """Yield successive parts of ``stream`` according to ``plan``.

    With a known part count, exactly that many parts are read (a zero-length
    object yields one empty part).  With an unknown count, parts are yielded
    until the stream is exhausted; an empty stream still yields one empty part.
    """
    if plan.part_count is not None:
        for _ in range(plan.part_count):
            yield read_part(stream, plan.part_size)
        return

    first = True
    while True:
        data = read_part(stream, plan.part_size)
        if not data and not first:
            return
        yield data
        first = False
        if len(data) < plan.part_size:
            return
