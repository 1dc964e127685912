from typing import Optional


class ReviewError(Exception):
    """Base exception for registration review errors"""
    status_code = 500

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class BackendError(ReviewError):
    """Raised when a backend call does not complete successfully"""
    status_code = 502


class ValidationError(ReviewError):
    """Raised when local input validation fails"""
    status_code = 400


class RequestNotFoundError(ReviewError):
    """Raised when no displayed request matches a username"""
    status_code = 404
