"""
reporting/decoders package exports.
"""

from reporting.decoders.base import (
    GENERIC_VALUE_KEY,
    NAME_KEY,
    BaseReportDecoder,
    NormalizedRecord,
)
from reporting.decoders.matrix import MatrixDecoder
from reporting.decoders.summary import SummaryDecoder
from reporting.decoders.tabular import TabularDecoder

__all__ = [
    "GENERIC_VALUE_KEY",
    "NAME_KEY",
    "BaseReportDecoder",
    "MatrixDecoder",
    "NormalizedRecord",
    "SummaryDecoder",
    "TabularDecoder",
]
