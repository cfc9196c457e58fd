"""
Report normalization engine.

Turns raw analytics report payloads (TABULAR, SUMMARY, MATRIX) into flat,
format-agnostic records.
"""

from reporting.metadata import MetadataResolver
from reporting.normalizer import NormalizationResult, ReportNormalizer, normalize
from reporting.payload import GRAND_TOTAL_KEY, ReportFormat, parse_payload

__all__ = [
    "GRAND_TOTAL_KEY",
    "MetadataResolver",
    "NormalizationResult",
    "ReportFormat",
    "ReportNormalizer",
    "normalize",
    "parse_payload",
]
