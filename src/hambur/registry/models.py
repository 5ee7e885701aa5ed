from pydantic import BaseModel, ConfigDict, Field


class ModelDescriptor(BaseModel):
    """A chat model offered by a provider."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Model identifier sent in the request body")
    name: str = Field(description="Short display name used for matching and output")
    provider: str = Field(description="Name of the provider serving the model")


class ProviderDescriptor(BaseModel):
    """An OpenAI-compatible chat-completions endpoint and its models."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Provider name")
    api_base: str = Field(description="Full chat-completions URL")
    api_key_env: str = Field(description="Environment variable holding the API key")
    models: tuple[ModelDescriptor, ...] = Field(default=(), description="Models served")
