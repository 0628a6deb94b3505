#!/usr/bin/env python3
"""
Service layer exceptions shared by the match and interview services.

The web layer maps each class to an HTTP status in
web/backend/exceptions.py.
"""


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = 500


class ValidationException(ServiceException):
    """Malformed enum, missing required field or bad time format."""
    status_code = 400


class ConflictException(ServiceException):
    """Request is well-formed but not allowed in the current state."""
    status_code = 400


class AuthorizationException(ServiceException):
    """Wrong role, or acting on someone else's resource."""
    status_code = 403


class NotFoundException(ServiceException):
    """Listing, interview, match or candidate is missing."""
    status_code = 404


class StorageException(ServiceException):
    """Unexpected persistence failure."""
    status_code = 500
