"""Configuration management for pyrequests."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/79.0.3945.130 Safari/537.36"
)


@dataclass
class Config:
    """Transport and session defaults.

    One Config is handed to every transport construction, so behaviour such
    as redirect following is scoped to the sessions sharing it instead of
    being a process-wide switch.
    """

    # Request seeding files
    header_file: Optional[str] = None
    cookie_file: Optional[str] = None

    # HTTP settings
    follow_redirects: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    trust_env: bool = True  # Honour HTTP(S)_PROXY etc. from the environment

    # Custom transport (e.g. httpx.MockTransport); None means real network
    transport: Optional[httpx.BaseTransport] = None

    def __post_init__(self):
        """Validate configuration."""
        if not self.user_agent:
            raise ValueError("user_agent must not be empty")

        if self.header_file and not Path(self.header_file).is_file():
            raise ValueError(f"Header file not found: {self.header_file}")

        if self.cookie_file and not Path(self.cookie_file).is_file():
            raise ValueError(f"Cookie file not found: {self.cookie_file}")
