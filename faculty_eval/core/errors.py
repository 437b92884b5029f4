"""
Service error taxonomy

Raised from core/ and services/, translated to HTTP responses once in main.py.
"""


class EvaluationServiceError(Exception):
    """Base class for errors surfaced to API callers"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EvaluationServiceError):
    """Missing or malformed input"""
    status_code = 400


class Unauthorized(EvaluationServiceError):
    """Missing or invalid credential"""
    status_code = 401


class Forbidden(EvaluationServiceError):
    """Authenticated but not allowed"""
    status_code = 403


class NotFound(EvaluationServiceError):
    status_code = 404


class Conflict(EvaluationServiceError):
    """Duplicate unique field"""
    status_code = 409
