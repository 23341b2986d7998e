"""
Domain Models Package

Value objects for credentials, tokens and analysis requests/results,
independent of the transport.
"""

from .credentials import (
    Credentials,
    TokenPair
)

from .analysis import (
    AnalysisStatus,
    AnalysisSubmission,
    AnalysisQuery,
    AnalysisResult,
    AnalysisReport
)

__all__ = [
    # Credentials
    "Credentials",
    "TokenPair",

    # Analysis
    "AnalysisStatus",
    "AnalysisSubmission",
    "AnalysisQuery",
    "AnalysisResult",
    "AnalysisReport"
]
