import os

from pydantic import BaseModel

from bugsink_mcp.exceptions import ConfigurationError

USAGE_HINT = """BUGSINK_URL and BUGSINK_TOKEN environment variables are required

Set them in your MCP configuration:
  "env": {
    "BUGSINK_URL": "https://your-bugsink-instance.com",
    "BUGSINK_TOKEN": "your-api-token"
  }"""


class BugsinkConfig(BaseModel):
    url: str = ""
    token: str = ""
    timeout: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        return cls(
            url=os.getenv("BUGSINK_URL", ""),
            token=os.getenv("BUGSINK_TOKEN", ""),
            timeout=float(os.getenv("BUGSINK_TIMEOUT", "30")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def base_url(self) -> str:
        return self.url.rstrip("/")

    def is_configured(self) -> bool:
        return bool(self.url and self.token)

    def require(self) -> "BugsinkConfig":
        if not self.is_configured():
            raise ConfigurationError(USAGE_HINT)
        return self
