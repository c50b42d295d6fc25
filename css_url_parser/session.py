"""HTTP session management for fetching remote stylesheets and pages."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import REQUEST_TIMEOUT

log = logging.getLogger("css-url-parser")


def build_session(verify_ssl: bool = True) -> requests.Session:
    """
    Create a requests.Session with retry logic for fetching remote inputs.

    Args:
        verify_ssl: Whether to verify TLS certificates

    Returns:
        Configured requests.Session instance
    """
    session = requests.Session()
    retry = Retry(
        total=3,
        backoff_factor=0.5,
        status_forcelist=[500, 502, 503, 504],
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({"Accept": "text/css,text/html;q=0.9,*/*;q=0.1"})
    return session


def is_remote(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_text(url: str, session: Optional[requests.Session] = None) -> tuple[str, str]:
    """
    GET a stylesheet or HTML page.

    Args:
        url: http(s) URL to fetch
        session: Session to reuse; a new one is built when omitted

    Returns:
        ``(text, content_type)`` with the Content-Type lowercased and
        stripped of parameters

    Raises ``requests.RequestException`` on network errors and non-2xx
    responses.
    """
    if session is None:
        session = build_session()
    log.debug("GET %s", url)
    resp = session.get(url, timeout=REQUEST_TIMEOUT)
    resp.raise_for_status()
    content_type = resp.headers.get("Content-Type", "").split(";")[0].strip().lower()
    return resp.text, content_type
