"""Tests for multipart part planning."""

import io

import pytest

from s3reqkit.errors import EntityTooLarge, InvalidPartSize, S3ClientError, TooManyParts
from s3reqkit.partplan import (
    MAX_MULTIPART_COUNT,
    MAX_OBJECT_SIZE,
    MAX_PART_SIZE,
    MIN_PART_SIZE,
    PartPlan,
    calc_part_info,
    iter_parts,
    read_part,
)

MiB = 1024 * 1024
GiB = 1024 * MiB


class TestConstants:
    """Provider limits."""

    def test_values(self):
        assert MIN_PART_SIZE == 5 * MiB
        assert MAX_PART_SIZE == 5 * GiB
        assert MAX_OBJECT_SIZE == 5 * 1024 * GiB
        assert MAX_MULTIPART_COUNT == 10000


class TestCalcPartInfoAuto:
    """Part size chosen automatically (part_size=0)."""

    def test_five_terabytes(self):
        """5 TB splits into 5 MiB multiples without exceeding 10000 parts."""
        plan = calc_part_info(5_000_000_000_000)
        assert plan.part_size % MIN_PART_SIZE == 0
        assert plan.part_count <= MAX_MULTIPART_COUNT
        assert plan == PartPlan(part_size=96 * MIN_PART_SIZE, part_count=9935)

    def test_max_object_size(self):
        plan = calc_part_info(MAX_OBJECT_SIZE)
        assert plan.part_size % MIN_PART_SIZE == 0
        assert plan.part_count <= MAX_MULTIPART_COUNT
        assert plan.part_size * plan.part_count >= MAX_OBJECT_SIZE

    def test_hundred_mib(self):
        """Small objects use the minimum part size."""
        assert calc_part_info(100 * MiB) == PartPlan(part_size=5 * MiB, part_count=20)

    def test_small_object_single_part(self):
        """An object below the minimum part size is one part of its own size."""
        assert calc_part_info(1000) == PartPlan(part_size=1000, part_count=1)

    def test_zero_length_object(self):
        """An empty object still has one (empty) part."""
        assert calc_part_info(0) == PartPlan(part_size=0, part_count=1)


class TestCalcPartInfoExplicit:
    """Caller-supplied part sizes."""

    def test_clamped_to_object_size(self):
        plan = calc_part_info(1000, 10 * MiB)
        assert plan == PartPlan(part_size=1000, part_count=1)

    def test_exact_multiple(self):
        assert calc_part_info(10 * MiB, 5 * MiB) == PartPlan(part_size=5 * MiB, part_count=2)

    def test_remainder_part(self):
        assert calc_part_info(10 * MiB + 1, 5 * MiB).part_count == 3

    def test_too_small(self):
        with pytest.raises(InvalidPartSize) as exc_info:
            calc_part_info(100 * MiB, MiB)
        assert str(exc_info.value) == f"part size {MiB} is not supported; minimum allowed 5MiB"

    def test_too_large(self):
        with pytest.raises(InvalidPartSize) as exc_info:
            calc_part_info(100 * MiB, 6 * GiB)
        assert "maximum allowed 5GiB" in str(exc_info.value)

    def test_too_many_parts(self):
        """The message names both sizes and the limit."""
        with pytest.raises(TooManyParts) as exc_info:
            calc_part_info(MAX_OBJECT_SIZE, MIN_PART_SIZE)
        assert str(exc_info.value) == (
            f"object size {MAX_OBJECT_SIZE} and part size {MIN_PART_SIZE} "
            "make more than 10000 parts for upload"
        )

    def test_boundary_part_sizes_accepted(self):
        assert calc_part_info(20 * GiB, MIN_PART_SIZE).part_size == MIN_PART_SIZE
        assert calc_part_info(20 * GiB, MAX_PART_SIZE) == PartPlan(MAX_PART_SIZE, 4)


class TestCalcPartInfoLimits:
    """Object-size limits and unknown sizes."""

    def test_six_terabytes_rejected(self):
        with pytest.raises(EntityTooLarge) as exc_info:
            calc_part_info(6_000_000_000_000)
        assert str(exc_info.value) == (
            "object size 6000000000000 is not supported; maximum allowed 5TiB"
        )

    def test_unknown_size_without_part_size(self):
        with pytest.raises(InvalidPartSize) as exc_info:
            calc_part_info(-1)
        assert str(exc_info.value) == (
            "valid part size must be provided when object size is unknown"
        )

    def test_unknown_size_streams(self):
        """Unknown size with a part size yields an unknown part count."""
        plan = calc_part_info(-1, 16 * MiB)
        assert plan.part_size == 16 * MiB
        assert plan.part_count is None
        assert plan.is_streaming

    def test_known_size_not_streaming(self):
        assert not calc_part_info(1000).is_streaming

    def test_errors_are_recoverable(self):
        """Planning failures are client errors, not fatal ones."""
        with pytest.raises(S3ClientError):
            calc_part_info(-1, MiB)

    def test_plan_is_immutable(self):
        plan = calc_part_info(1000)
        with pytest.raises(AttributeError):
            plan.part_count = 2  # type: ignore[misc]


class _TrickleStream(io.RawIOBase):
    """A stream that returns at most one byte per read()."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        chunk = self._data[self._pos : self._pos + 1]
        self._pos += len(chunk)
        return chunk


class TestReadPart:
    """Tests for read_part()."""

    def test_full_read(self):
        assert read_part(io.BytesIO(b"abcdef"), 4) == b"abcd"

    def test_short_reads_retried(self):
        assert read_part(_TrickleStream(b"abcdef"), 4) == b"abcd"

    def test_eof(self):
        assert read_part(io.BytesIO(b"ab"), 4) == b"ab"


class TestIterParts:
    """Tests for iter_parts()."""

    def test_known_count(self):
        parts = list(iter_parts(io.BytesIO(b"x" * 12), PartPlan(part_size=5, part_count=3)))
        assert [len(p) for p in parts] == [5, 5, 2]

    def test_zero_length_object(self):
        plan = calc_part_info(0)
        assert list(iter_parts(io.BytesIO(b""), plan)) == [b""]

    def test_streaming(self):
        parts = list(iter_parts(io.BytesIO(b"y" * 10), PartPlan(part_size=4, part_count=None)))
        assert parts == [b"yyyy", b"yyyy", b"yy"]

    def test_streaming_exact_multiple(self):
        """No trailing empty part when the stream ends on a boundary."""
        parts = list(iter_parts(io.BytesIO(b"z" * 8), PartPlan(part_size=4, part_count=None)))
        assert parts == [b"zzzz", b"zzzz"]

    def test_streaming_empty(self):
        assert list(iter_parts(io.BytesIO(b""), PartPlan(part_size=4, part_count=None))) == [b""]
