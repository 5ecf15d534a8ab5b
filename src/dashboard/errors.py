"""
Errors raised at the dashboard's request boundary
"""

from typing import Dict


class DashboardError(Exception):
    """Base error; carries a machine-readable code and an HTTP-like status."""
    code = 'INTERNAL_SERVER_ERROR'
    status = 500
    title = 'Internal server error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {'error': self.title, 'code': self.code, 'message': self.message}


class AuthenticationError(DashboardError):
    code = 'USER_NOT_FOUND'
    status = 401
    title = 'User not authenticated'


class InvalidUserIdError(DashboardError):
    code = 'INVALID_USER_ID'
    status = 400
    title = 'Invalid user ID'


class InvalidRangeError(DashboardError):
    code = 'INVALID_DAYS'
    status = 400
    title = 'Invalid days parameter'


class PostNotFoundError(DashboardError):
    code = 'POST_NOT_FOUND'
    status = 404
    title = 'Post not found'


class StorageError(DashboardError):
    code = 'DATABASE_ERROR'
    status = 500
    title = 'Database query failed'
