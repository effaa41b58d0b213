#!/usr/bin/env python3
# ascii_pixel/sources.py
"""
Layer source loading.

Reads ASCII art from local files or http(s) URLs.
Features:
- UTF-8 decoding for both files and HTTP bodies.
- Automatic retry of transient HTTP failures using urllib3 Retry.
- Every failure surfaces as SourceUnavailable with the original error chained.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ascii_pixel.config import Config
from ascii_pixel.errors import SourceUnavailable
from ascii_pixel.version import __version__

__all__ = ["SourceLoader", "is_url"]

log = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"ascii-pixel/{__version__}"


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


class SourceLoader:
    """
    Reads layer text by path or URL.
    Each loader owns its own HTTP session; do not share one across threads.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
        retries: int = 3,
        encoding: str = "utf-8",
    ):
        self.encoding = encoding
        self.timeout = (connect_timeout, read_timeout)

        # HTTP session with retry
        self.session = requests.Session()
        self.session.headers["User-Agent"] = user_agent
        retry = Retry(
            total=retries,
            connect=retries,
            read=retries,
            backoff_factor=0.3,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    @classmethod
    def from_config(cls, cfg: Config) -> "SourceLoader":
        s = cfg["sources"]
        return cls(
            user_agent=s["user_agent"],
            connect_timeout=float(s["connect_timeout_s"]),
            read_timeout=float(s["read_timeout_s"]),
            retries=int(s["retries"]),
        )

    def read(self, source: str) -> str:
        if is_url(source):
            return self._read_url(source)
        return self._read_file(source)

    def _read_file(self, source: str) -> str:
        path = Path(source).expanduser()
        try:
            # newline="": keep "\r" so line-ending handling stays with the parser
            with path.open("r", encoding=self.encoding, newline="") as f:
                text = f.read()
        except FileNotFoundError as e:
            raise SourceUnavailable(source, "File not found") from e
        except UnicodeDecodeError as e:
            raise SourceUnavailable(source, f"not valid {self.encoding} text ({e.reason})") from e
        except OSError as e:
            raise SourceUnavailable(source, e.strerror or str(e)) from e
        log.debug("read %s (%d chars)", source, len(text))
        return text

    def _read_url(self, source: str) -> str:
        try:
            r = self.session.get(source, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise SourceUnavailable(source, str(e)) from e
        try:
            text = r.content.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise SourceUnavailable(source, f"not valid {self.encoding} text ({e.reason})") from e
        log.debug("fetched %s (%d chars)", source, len(text))
        return text

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "SourceLoader":
        return self

    def __exit__(self, *exc) -> Optional[bool]:
        self.close()
        return None
