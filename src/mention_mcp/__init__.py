"""Mention MCP Server Package

A Model Context Protocol (MCP) server exposing the Mention media-monitoring
API (account lookup, alert management, mentions and statistics) as tools.
"""

from .account import AccountCache
from .client import MentionClient
from .config import Config, get_config, load_config
from .consts import PACKAGE_VERSION
from .exceptions import (
    AccessDeniedError,
    ArgumentValidationError,
    ConfigError,
    ErrorKind,
    InvalidCredentialError,
    MentionMCPError,
    NetworkError,
    RateLimitError,
    RequestTimeoutError,
    UnknownToolError,
    UpstreamError,
    UpstreamProtocolError,
    UpstreamShapeError,
)
from .tools import TOOLS, ToolRegistry

__version__ = PACKAGE_VERSION

__all__ = [
    "__version__",
    "get_config",
    "load_config",
    "Config",
    "MentionClient",
    "AccountCache",
    "ToolRegistry",
    "TOOLS",
    "ErrorKind",
    "MentionMCPError",
    "ConfigError",
    "ArgumentValidationError",
    "UnknownToolError",
    "RequestTimeoutError",
    "NetworkError",
    "InvalidCredentialError",
    "AccessDeniedError",
    "RateLimitError",
    "UpstreamError",
    "UpstreamProtocolError",
    "UpstreamShapeError",
]
