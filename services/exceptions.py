# -*- coding: utf-8 -*-
"""
Errors raised by the draft store and the drafts API client.

The auto-save worker turns any of these into an "error" status; the wizard
window shows them in a message box.
"""

from typing import Any, Dict, Optional


class ApiException(Exception):
    """The drafts API answered with an error status."""

    def __init__(self, message: str, status_code: int = 0, response_data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class DraftNotFoundException(ApiException):
    """A persisted draft id no longer exists on the server."""

    def __init__(self, draft_id: Any, response_data: Optional[Dict[str, Any]] = None):
        super().__init__(f"Draft {draft_id} not found", status_code=404, response_data=response_data)
        self.draft_id = draft_id


class NetworkException(Exception):
    """The drafts API could not be reached (connection error or timeout)."""


class ValidationException(Exception):
    """A store setter received an unknown field or a value outside its vocabulary."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
