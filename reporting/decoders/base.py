"""
reporting/decoders/base.py

Abstract base class for report format decoders.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from reporting.metadata import MetadataResolver

NormalizedRecord = dict[str, Any]

# Every record that carries a chartable figure exposes it under these keys,
# so generic bar/line/pie renderers can read any report without knowing
# its format.
NAME_KEY = "name"
GENERIC_VALUE_KEY = "value"

PayloadT = TypeVar("PayloadT")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


class BaseReportDecoder(ABC, Generic[PayloadT]):
    """
    Contract for format-specific decoders.

    Subclasses receive one typed payload variant plus a metadata resolver
    and return flat records in emission order.

    No I/O, no logging, and no side effects are permitted inside
    :meth:`decode`. Malformed optional fields are defaulted locally;
    decoding never raises for a parsed payload.
    """

    @abstractmethod
    def decode(self, payload: PayloadT, resolver: MetadataResolver) -> list[NormalizedRecord]:
        """
        Flatten *payload* into ordered records.

        Parameters
        ----------
        payload:
            Typed payload variant for this decoder's format.
        resolver:
            Label lookup for column and grouping keys.

        Returns
        -------
        list[NormalizedRecord]
            One record per chartable row, in emission order.
        """


def group_index_from_key(key: str) -> int:
    """
    Parse the leading ASCII integer of the first ``!``-delimited segment of
    a fact key. Trailing characters are ignored; no leading digits gives ``0``.
    """
    match = _LEADING_INT.match(key.split("!", 1)[0])
    return int(match.group(1)) if match else 0
