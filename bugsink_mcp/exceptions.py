"""
Error types raised by the Bugsink MCP server
"""


class BugsinkError(Exception):
    """Base class for all Bugsink MCP errors"""


class ConfigurationError(BugsinkError):
    """Required startup configuration is missing"""


class BugsinkAPIError(BugsinkError):
    """The Bugsink API answered with a non-2xx status"""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"Bugsink API error ({status}): {body}")


class BugsinkConnectionError(BugsinkError):
    """The Bugsink instance could not be reached"""


class BugsinkResponseError(BugsinkError):
    """The Bugsink API answered 2xx with a body that is not valid JSON"""
