"""Shared HTTP client used by the text-analysis service clients."""

import json
import logging
from typing import Optional, Dict, Any

import requests

logger = logging.getLogger(__name__)


class HTTPClient:
    """Thin wrapper around a requests.Session for JSON POST calls.

    Each call issues exactly one request. There is no retry and no rate
    limiting; transport errors and non-2xx responses raise.

    Args:
        timeout: Request timeout in seconds (default: None, the network
            stack's own default)
        session: Optional pre-built session (tests inject fakes here)
    """

    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.request_count = 0

    def post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """POST a JSON-encoded payload and return the raw response body.

        The body is serialized here rather than through ``json=`` so that the
        caller's ``Content-type`` header is sent untouched.

        Args:
            url: Full URL including any query string
            payload: JSON-serializable request body
            headers: Request headers
            timeout: Optional timeout override (uses instance default if None)

        Returns:
            Response body as text

        Raises:
            requests.HTTPError: On non-2xx responses
            requests.RequestException: On network errors
        """
        timeout = timeout if timeout is not None else self.timeout
        self.request_count += 1
        logger.debug("POST %s", url)
        r = self.session.post(url, data=json.dumps(payload), headers=headers, timeout=timeout)
        r.raise_for_status()
        return r.text

    def close(self):
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
