"""
Error types for menu fetching
Every failure on a fetch path is raised as one of these
"""

from typing import Optional


class MenuError(Exception):
    """Base class for all menu pipeline errors"""


class FetchError(MenuError):
    """
    Network failure or non-200 response

    Attributes:
        url: URL that was requested
        status: HTTP status code, or None if no response was received
        body: Start of the response body (empty if there was none)
    """
    def __init__(self, message: str, url: str = '', status: Optional[int] = None, body: str = ''):
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body


class ParseError(MenuError):
    """HTML document could not be parsed"""


class EncodeError(MenuError):
    """Request payload could not be serialized to JSON"""


class DecodeError(MenuError):
    """JSON response was invalid or did not have the expected shape"""


class DroppedDishRowsWarning(UserWarning):
    """A day listed more dish rows than there are menu categories"""
