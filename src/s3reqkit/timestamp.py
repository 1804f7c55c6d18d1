"""Request timestamps in the layouts used by SigV4 and HTTP date headers.

``Timestamp`` is an immutable instant (epoch seconds plus microseconds) with a
flag selecting local-time or UTC rendering.  Every ``format_*`` call resolves
the broken-down calendar time afresh.

Layouts:
    - signer date:   ``20260222``
    - amz date:      ``20260222T153000Z``
    - HTTP header:   ``Sun, 22 Feb 2026 15:30:00 GMT``
    - ISO-8601 UTC:  ``2026-02-22T15:30:00.123Z``

The layouts always carry a ``Z``/``GMT`` label.  A timestamp rendered with
``local=True`` therefore only reads back as the same instant when the parser
is given ``local=True`` too.
"""

import email.utils
import re
import time
from dataclasses import dataclass
from datetime import datetime, timezone

AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"

_ISO8601_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?Z?$"
)


@dataclass(frozen=True)
class Timestamp:
    """An instant with microsecond precision.

    Attributes:
        seconds: Seconds since the Unix epoch.
        microseconds: Sub-second part, 0-999999.
        local: Render in the process's local time zone instead of UTC.
    """

    seconds: int
    microseconds: int = 0
    local: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.microseconds <= 999_999:
            raise ValueError(f"microseconds must be in [0, 999999], got {self.microseconds}")

    # -- Construction ----------------------------------------------------------

    @classmethod
    def now(cls) -> "Timestamp":
        """Return the current wall-clock time."""
        return cls.from_datetime(datetime.now(timezone.utc))

    @classmethod
    def from_datetime(cls, dt: datetime, local: bool = False) -> "Timestamp":
        """Build a Timestamp from a datetime.

        Naive datetimes are taken to be UTC.
        """
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        epoch = dt.replace(microsecond=0).timestamp()
        return cls(int(epoch), dt.microsecond, local)

    @classmethod
    def _from_wall_clock(cls, wall: datetime, local: bool) -> "Timestamp":
        # naive datetime.timestamp() resolves through mktime, i.e. local time
        if local:
            epoch = wall.replace(microsecond=0).timestamp()
            return cls(int(epoch), wall.microsecond, True)
        return cls.from_datetime(wall)

    def to_datetime(self) -> datetime:
        """Return the instant as a timezone-aware UTC datetime."""
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc).replace(
            microsecond=self.microseconds
        )

    # -- Formatting ------------------------------------------------------------

    def _broken_down(self) -> time.struct_time:
        if self.local:
            return time.localtime(self.seconds)
        return time.gmtime(self.seconds)

    def format_signer_date(self) -> str:
        """Date part of the credential scope, ``YYYYMMDD``."""
        t = self._broken_down()
        return f"{t.tm_year:04d}{t.tm_mon:02d}{t.tm_mday:02d}"

    def format_amz_date(self) -> str:
        """Value for the ``x-amz-date`` header, ``YYYYMMDDTHHMMSSZ``."""
        t = self._broken_down()
        return (
            f"{t.tm_year:04d}{t.tm_mon:02d}{t.tm_mday:02d}"
            f"T{t.tm_hour:02d}{t.tm_min:02d}{t.tm_sec:02d}Z"
        )

    def format_http_header(self) -> str:
        """RFC 1123 date for HTTP headers, e.g. ``Tue, 14 Nov 2023 22:13:20 GMT``.

        ``email.utils`` spells day and month names in English regardless of
        the process locale.
        """
        t = self._broken_down()
        dt = datetime(*t[:6], tzinfo=timezone.utc)
        return email.utils.format_datetime(dt, usegmt=True)

    def format_iso8601_utc(self) -> str:
        """ISO 8601 with milliseconds, ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
        t = self._broken_down()
        millis = self.microseconds // 1000
        return (
            f"{t.tm_year:04d}-{t.tm_mon:02d}-{t.tm_mday:02d}"
            f"T{t.tm_hour:02d}:{t.tm_min:02d}:{t.tm_sec:02d}.{millis:03d}Z"
        )

    # -- Parsing ---------------------------------------------------------------

    @classmethod
    def parse_http_header(cls, text: str, local: bool = False) -> "Timestamp":
        """Parse an HTTP date header value.

        Args:
            text: An HTTP date (RFC 1123, RFC 850 or asctime).
            local: Read the wall-clock fields as local time and return a
                local-rendering Timestamp, the inverse of
                ``Timestamp(..., local=True).format_http_header()``.

        Raises:
            ValueError: If ``text`` is not an HTTP date.
        """
        dt = email.utils.parsedate_to_datetime(text.strip())
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return cls._from_wall_clock(dt.replace(tzinfo=None), local)

    @classmethod
    def parse_iso8601_utc(cls, text: str, local: bool = False) -> "Timestamp":
        """Parse ``YYYY-MM-DDTHH:MM:SS[.f...][Z]``.

        The fraction may have any number of digits.  It is read positionally,
        so ``.5`` is 500 ms and digits beyond microseconds are dropped.
        With ``local=True`` the fields are local wall-clock time, matching
        what a local-rendering Timestamp formats.

        Raises:
            ValueError: If ``text`` does not match the layout.
        """
        match = _ISO8601_RE.match(text.strip())
        if not match:
            raise ValueError(f"invalid ISO 8601 timestamp: {text!r}")
        fraction = match.group("fraction") or ""
        micros = int(fraction[:6].ljust(6, "0"))
        wall = datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
            micros,
        )
        return cls._from_wall_clock(wall, local)

    @classmethod
    def parse_amz_date(cls, text: str, local: bool = False) -> "Timestamp":
        """Parse an ``x-amz-date`` value (``YYYYMMDDTHHMMSSZ``).

        Raises:
            ValueError: If ``text`` does not match the layout.
        """
        return cls._from_wall_clock(datetime.strptime(text, AMZ_DATE_FORMAT), local)
