"""Case-insensitive, multi-valued container for request headers and query params.

Storage keeps the caller's key spelling so headers go on the wire as given,
while lookups ignore case.  Two cooperating dicts hold the data:

* ``_values``: original-case key -> set of values
* ``_spellings``: lower-case key -> original-case spellings, in insertion order

Canonical exports follow the SigV4 canonical-request rules and are fed
verbatim into the signature, so their output is byte-for-byte deterministic.

Instances are owned by a single request builder and are not safe for
concurrent mutation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping

from s3reqkit.strings import uri_encode

# Headers never included in the signature.
_UNSIGNED_HEADERS = frozenset({"authorization", "user-agent"})

_MULTI_SPACE_RE = re.compile(r" +")


class HeaderMultimap:
    """A case-insensitive multimap of string keys to string values."""

    def __init__(self) -> None:
        self._values: dict[str, set[str]] = {}
        self._spellings: dict[str, list[str]] = {}

    @classmethod
    def from_pairs(
        cls, pairs: Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> HeaderMultimap:
        """Build a multimap from a mapping or an iterable of (key, value) pairs."""
        result = cls()
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        for key, value in items:
            result.add(key, value)
        return result

    # -- Mutation --------------------------------------------------------------

    def add(self, key: str, value: str) -> None:
        """Add ``value`` under ``key``; duplicate values for a spelling collapse.

        Raises:
            ValueError: If ``key`` is empty.
        """
        if not key:
            raise ValueError("multimap key must not be empty")
        self._values.setdefault(key, set()).add(value)
        spellings = self._spellings.setdefault(key.lower(), [])
        if key not in spellings:
            spellings.append(key)

    def add_all(self, other: HeaderMultimap) -> None:
        """Union every entry of ``other`` into this multimap."""
        for key, values in other._values.items():
            for value in values:
                self.add(key, value)

    def copy(self) -> HeaderMultimap:
        result = HeaderMultimap()
        result.add_all(self)
        return result

    # -- Lookup ----------------------------------------------------------------

    def contains(self, key: str) -> bool:
        """Case-insensitive membership test."""
        return key.lower() in self._spellings

    def get(self, key: str) -> list[str]:
        """Return all values for ``key`` across every spelling of it.

        Spellings are visited in insertion order and each spelling's values
        are sorted.  An absent key yields an empty list.
        """
        result: list[str] = []
        for spelling in self._spellings.get(key.lower(), ()):
            result.extend(sorted(self._values[spelling]))
        return result

    def get_front(self, key: str) -> str:
        """Return the first value of ``get(key)``, or ``""`` when absent."""
        values = self.get(key)
        return values[0] if values else ""

    def keys(self) -> list[str]:
        """Return every distinct key, lower-cased."""
        return list(self._spellings)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._spellings)

    def __repr__(self) -> str:
        pairs = {key: sorted(values) for key, values in self._values.items()}
        return f"HeaderMultimap({pairs!r})"

    def _pairs(self) -> Iterator[tuple[str, str]]:
        for key, values in self._values.items():
            for value in sorted(values):
                yield key, value

    # -- Exports ---------------------------------------------------------------

    def to_http_headers(self) -> list[str]:
        """Return ``"Key: value"`` lines, one per (key, value) pair."""
        return [f"{key}: {value}" for key, value in self._pairs()]

    def to_query_string(self) -> str:
        """Return an encoded query string in the container's natural order.

        Keys appear in insertion order; this is for building URLs, not for
        signing (see ``get_canonical_query_string``).
        """
        return "&".join(f"{uri_encode(key)}={uri_encode(value)}" for key, value in self._pairs())

    def get_canonical_headers(self) -> tuple[str, str]:
        """Build the signed-headers list and the canonical headers block.

        ``authorization`` and ``user-agent`` are left out.  Names are
        lower-cased, runs of spaces inside each value collapse to one space,
        and a name's values are joined with commas.

        Returns:
            ``(signed_headers, canonical_headers)`` where ``signed_headers`` is
            the sorted names joined by ``;`` and ``canonical_headers`` is the
            sorted ``name:value`` lines joined by ``\\n`` (no trailing newline).
        """
        canonical: dict[str, str] = {}
        for lower_key in self._spellings:
            if lower_key in _UNSIGNED_HEADERS:
                continue
            canonical[lower_key] = ",".join(
                _MULTI_SPACE_RE.sub(" ", value) for value in self.get(lower_key)
            )

        names = sorted(canonical)
        signed_headers = ";".join(names)
        canonical_headers = "\n".join(f"{name}:{canonical[name]}" for name in names)
        return signed_headers, canonical_headers

    def get_canonical_query_string(self) -> str:
        """Build the canonical query string used in the signature.

        Keys are sorted by code point (case-sensitive), each key's values are
        sorted, and every name and value is URI-encoded.
        """
        pairs = []
        for key in sorted(self._values):
            for value in sorted(self._values[key]):
                pairs.append(f"{uri_encode(key)}={uri_encode(value)}")
        return "&".join(pairs)
