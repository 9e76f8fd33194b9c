"""Errors raised at the boundary of the audit pipeline."""


class AuditError(Exception):
    pass


class MissingUploadError(AuditError):
    """No PDF was supplied with the request."""


class ExtractionError(AuditError):
    """The PDF could not be read."""


class InvalidRulesError(AuditError, ValueError):
    """The rule list is not a JSON array of strings."""
