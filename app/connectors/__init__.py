"""
app/connectors package marker.
"""

from app.connectors.base import BaseConnector, ConnectorRequestError, ReportAPIAuthError
from app.connectors.report_api_connector import ReportAPIConnector

__all__ = [
    "BaseConnector",
    "ConnectorRequestError",
    "ReportAPIAuthError",
    "ReportAPIConnector",
]
