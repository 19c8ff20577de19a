"""
Exceptions raised by the Lead Scoring Service
"""


class LeadScoringError(Exception):
    """Base class for caller-facing scoring errors"""


class ScoringPreconditionError(LeadScoringError):
    """A scoring run was requested without an offer or without leads"""

    def __init__(self, missing: str, message: str):
        super().__init__(message)
        self.missing = missing


class NoResultsError(LeadScoringError):
    """Results were requested for export before any successful run"""


class LeadImportError(LeadScoringError):
    """An uploaded lead file could not be parsed"""
