"""Error taxonomy for a chat turn.

Configuration and transport errors are reported to the user as the
turn's reply; none of them end the session.
"""

from enum import Enum


class HamburError(Exception):
    """Base class for all Hambur errors."""


class ConfigurationError(HamburError):
    """The turn cannot be sent because local configuration is incomplete."""


class UnknownModelError(ConfigurationError):
    def __init__(self, model_id: str):
        self.model_id = model_id
        super().__init__(f"No provider found for model {model_id}")


class MissingCredentialError(ConfigurationError):
    def __init__(self, env_var: str):
        self.env_var = env_var
        super().__init__(f"Environment variable {env_var} is not set")


class TransportErrorKind(str, Enum):
    """Classification of a failed request."""

    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    HTTP_ERROR = "http_error"
    NETWORK = "network"


class ChatTransportError(HamburError):
    """The request failed before or while the reply was streamed.

    The string form is the human-readable diagnostic shown to the user.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: TransportErrorKind,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_status(
        cls,
        status_code: int,
        reason: str,
        body: str,
        *,
        api_key_env: str,
    ) -> "ChatTransportError":
        """Build the diagnostic for a non-success HTTP status.

        Args:
            status_code: HTTP status returned by the provider
            reason: Reason phrase for the status
            body: Response body, shown verbatim
            api_key_env: Credential variable to point the user at on 401

        Returns:
            Classified transport error
        """
        if status_code == 401:
            kind = TransportErrorKind.UNAUTHORIZED
            message = (
                "Authentication failed (401): the API key may be invalid or expired. "
                f"Check the {api_key_env} environment variable."
            )
        elif status_code == 429:
            kind = TransportErrorKind.RATE_LIMITED
            message = "Too many requests (429): the API rate limit was exceeded."
        else:
            kind = TransportErrorKind.HTTP_ERROR
            message = f"API request failed ({status_code}): {reason or 'Unknown error'}"

        return cls(
            f"{message}\nRaw response: {body}",
            kind=kind,
            status_code=status_code,
            body=body,
        )

    @classmethod
    def from_network(cls, exc: BaseException) -> "ChatTransportError":
        """Build the diagnostic for a connection or read failure."""
        detail = str(exc) or exc.__class__.__name__
        return cls(
            f"API request failed: {detail}\n"
            "Check your network connection and API endpoint configuration.",
            kind=TransportErrorKind.NETWORK,
        )
