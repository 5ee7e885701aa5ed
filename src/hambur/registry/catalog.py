"""Static provider table.

Hides which endpoints exist and which credential each one needs.
Everything here is a pure function of the table below.
"""

from .models import ModelDescriptor, ProviderDescriptor

DEFAULT_MODEL_ID = "google/gemini-2.0-flash-001"

_PROVIDERS: tuple[ProviderDescriptor, ...] = (
    ProviderDescriptor(
        name="deepseek",
        api_base="https://ark.cn-beijing.volces.com/api/v3/chat/completions",
        api_key_env="OPENAI_API_KEY",
        models=(
            ModelDescriptor(id="deepseek-r1-250120", name="deepseek-r1", provider="deepseek"),
            ModelDescriptor(id="deepseek-v3-241226", name="deepseek-v3", provider="deepseek"),
        ),
    ),
    ProviderDescriptor(
        name="openrouter",
        api_base="https://openrouter.ai/api/v1/chat/completions",
        api_key_env="OPENROUTER_API_KEY",
        models=(
            ModelDescriptor(
                id="google/gemini-2.0-flash-001",
                name="gemini-flash",
                provider="openrouter",
            ),
            ModelDescriptor(
                id="google/gemini-2.0-flash-lite-001",
                name="gemini-flash-lite",
                provider="openrouter",
            ),
            ModelDescriptor(
                id="google/gemini-2.0-pro-exp-02-05",
                name="gemini-pro",
                provider="openrouter",
            ),
        ),
    ),
)


def get_providers() -> tuple[ProviderDescriptor, ...]:
    """Return every known provider in registry order."""
    return _PROVIDERS


def find_models(query: str) -> list[ModelDescriptor]:
    """Find models whose id or display name contains ``query``.

    Matching is a case-sensitive substring test. Results keep registry
    insertion order and are not ranked.

    Args:
        query: Substring to look for

    Returns:
        Matching models, possibly empty
    """
    return [
        model
        for provider in _PROVIDERS
        for model in provider.models
        if query in model.name or query in model.id
    ]


def lookup_provider_for_model(model_id: str) -> ProviderDescriptor | None:
    """Return the provider serving ``model_id``, or None if no provider does."""
    for provider in _PROVIDERS:
        if any(model.id == model_id for model in provider.models):
            return provider
    return None


def get_model(model_id: str) -> ModelDescriptor | None:
    """Return the descriptor for an exact model id."""
    for provider in _PROVIDERS:
        for model in provider.models:
            if model.id == model_id:
                return model
    return None
