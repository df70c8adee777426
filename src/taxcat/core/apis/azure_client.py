"""
Azure Text Analytics client for entity recognition and linking.

Azure returns named entities with per-match Wikipedia linkage and entity
type confidence scores. Those scores decide which organizations and people
end up as taxonomy terms on a post.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..http_client import HTTPClient

logger = logging.getLogger(__name__)

AZURE_ENDPOINT = "https://westus.api.cognitive.microsoft.com"
AZURE_ENTITIES_PATH = "/text/analytics/v2.1/entities"


class AzureEntityClient:
    """Stateless POST wrapper around the Azure entities endpoint.

    Args:
        api_key: Subscription key sent as ``Ocp-Apim-Subscription-Key``
        endpoint: Service host (default: West US region)
        path: Entities path (default: v2.1)
        language: Document language code
        http: Shared HTTP client (a new one is created if omitted)
    """

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = AZURE_ENDPOINT,
        path: str = AZURE_ENTITIES_PATH,
        language: str = "en",
        http: Optional[HTTPClient] = None,
    ):
        self.api_key = api_key
        self.url = endpoint.rstrip("/") + path
        self.language = language
        self.http = http or HTTPClient()

    def build_document(self, text: str) -> Dict[str, Any]:
        """Wrap already-cleaned text in the single-document request body."""
        return {
            "documents": [
                {"id": "1", "language": self.language, "text": text},
            ]
        }

    def headers(self) -> Dict[str, str]:
        return {
            "Content-type": "text/json",
            "Ocp-Apim-Subscription-Key": self.api_key,
        }

    def fetch_entities(self, text: str) -> str:
        """Send one document to Azure and return the raw JSON response body.

        Args:
            text: Plain text, already stripped and truncated by the caller

        Raises:
            requests.RequestException: On transport or HTTP errors
        """
        logger.info("Requesting Azure entities for %d characters of text", len(text))
        return self.http.post_json(self.url, self.build_document(text), headers=self.headers())
