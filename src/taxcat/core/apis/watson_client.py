"""
Watson Natural Language Understanding client.

Watson extracts entities (with relevance scores) and concepts from the raw
post body. Its results are only reported, never written back to the post.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional

from ..http_client import HTTPClient

logger = logging.getLogger(__name__)

WATSON_ENDPOINT = "https://gateway.watsonplatform.net"
WATSON_ANALYZE_PATH = "/natural-language-understanding/api/v1/analyze?version=2018-11-16"


def basic_auth_header(username: str, password: str) -> str:
    """Return the value of an HTTP Basic ``Authorization`` header."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class WatsonNLUClient:
    """Stateless POST wrapper around the Watson NLU analyze endpoint.

    Args:
        api_key: IAM API key, sent as the Basic auth password
        endpoint: Service host
        path: Analyze path including the version query
        username: Basic auth user name (Watson expects the literal ``apikey``)
        entity_limit: Maximum number of entities to return
        concept_limit: Maximum number of concepts to return
        http: Shared HTTP client (a new one is created if omitted)
    """

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = WATSON_ENDPOINT,
        path: str = WATSON_ANALYZE_PATH,
        username: str = "apikey",
        entity_limit: int = 50,
        concept_limit: int = 8,
        http: Optional[HTTPClient] = None,
    ):
        self.api_key = api_key
        self.url = endpoint.rstrip("/") + path
        self.username = username
        self.entity_limit = entity_limit
        self.concept_limit = concept_limit
        self.http = http or HTTPClient()

    def build_payload(self, text: str) -> Dict[str, Any]:
        return {
            "text": text,
            "features": {
                "entities": {
                    "emotion": False,
                    "sentiment": False,
                    "limit": self.entity_limit,
                },
                "concepts": {
                    "limit": self.concept_limit,
                },
            },
        }

    def headers(self) -> Dict[str, str]:
        return {
            "Content-type": "application/json",
            "Authorization": basic_auth_header(self.username, self.api_key),
        }

    def fetch_analysis(self, text: str) -> str:
        """Send the raw post text to Watson and return the raw JSON response body.

        Raises:
            requests.RequestException: On transport or HTTP errors
        """
        logger.info("Requesting Watson analysis for %d characters of text", len(text))
        return self.http.post_json(self.url, self.build_payload(text), headers=self.headers())
