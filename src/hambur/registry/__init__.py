"""Provider and model registry.

Static lookup table for the chat endpoints Hambur knows how to talk to.
"""

from .catalog import (
    DEFAULT_MODEL_ID,
    find_models,
    get_model,
    get_providers,
    lookup_provider_for_model,
)
from .models import ModelDescriptor, ProviderDescriptor

__all__ = [
    "DEFAULT_MODEL_ID",
    "ModelDescriptor",
    "ProviderDescriptor",
    "find_models",
    "get_model",
    "get_providers",
    "lookup_provider_for_model",
]
