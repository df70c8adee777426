"""
API client modules for the text-analysis services.

This package provides one client per service:
- Azure Text Analytics (entity recognition and linking)
- Watson Natural Language Understanding (entities and concepts)
"""

from .azure_client import AzureEntityClient
from .watson_client import WatsonNLUClient, basic_auth_header

__all__ = [
    'AzureEntityClient',
    'WatsonNLUClient',
    'basic_auth_header',
]
