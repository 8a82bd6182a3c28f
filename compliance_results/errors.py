"""Exceptions raised by the compliance results pipeline."""


class ComplianceResultsError(Exception):
    """Base class for all compliance results errors."""


class MalformedArchiveError(ComplianceResultsError):
    """Raised when a stream cannot be read as a tar archive."""


class NoMatchingMemberError(ComplianceResultsError):
    """Raised when no archive member matches the requested suffix."""


class CorruptStreamError(ComplianceResultsError):
    """Raised when a compressed stream cannot be decompressed."""


class MemberCopyError(ComplianceResultsError):
    """Raised on the reading side when copying a member into a pipe failed."""


class MalformedReportError(ComplianceResultsError):
    """Raised when a JUnit report cannot be parsed."""


class RetrievalError(ComplianceResultsError):
    """Raised when a results source cannot provide the archive."""


class ResultsPipelineError(ComplianceResultsError):
    """Raised by the pipeline with a description of the failing stage."""
