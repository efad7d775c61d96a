"""Function configuration loaded once per process from the hosting environment."""

from typing import Any, Dict, Mapping, Optional
from pydantic import BaseModel, ConfigDict

from .exceptions import ConfigurationError

DEFAULT_BUCKET = "imageAI"
PROVIDERS = ("oci", "aws")

IDENTITY_KEYS = {
    "version": "OCI_RESOURCE_PRINCIPAL_VERSION",
    "region": "OCI_RESOURCE_PRINCIPAL_REGION",
    "session_token": "OCI_RESOURCE_PRINCIPAL_RPST",
    "private_key": "OCI_RESOURCE_PRINCIPAL_PRIVATE_PEM",
}

REDACTED = "***"


class ResourcePrincipalIdentity(BaseModel):
    """Service-principal material the runtime injects into the function."""

    model_config = ConfigDict(frozen=True)

    version: str
    region: str
    session_token: str
    private_key: str

    def redacted(self) -> Dict[str, str]:
        """Loggable view; the token and key never reach the logs."""
        return {
            IDENTITY_KEYS["version"]: self.version,
            IDENTITY_KEYS["region"]: self.region,
            IDENTITY_KEYS["session_token"]: REDACTED,
            IDENTITY_KEYS["private_key"]: REDACTED,
        }


class FunctionConfig(BaseModel):
    """Immutable configuration for the lifetime of the function process."""

    model_config = ConfigDict(frozen=True)

    namespace: str
    bucket_in: str = DEFAULT_BUCKET
    bucket_out: str = DEFAULT_BUCKET
    debug: bool = False
    provider: str = "oci"
    max_results: Optional[int] = None
    identity: Optional[ResourcePrincipalIdentity] = None

    def describe(self) -> Dict[str, Any]:
        described: Dict[str, Any] = {
            "OCI_NAMESPACE": self.namespace,
            "BUCKET_IN": self.bucket_in,
            "BUCKET_OUT": self.bucket_out,
            "GATEWAY_PROVIDER": self.provider,
        }
        if self.identity is not None:
            described.update(self.identity.redacted())
        return described


def _required(settings: Mapping[str, str], key: str) -> str:
    value = settings.get(key)
    if value is None:
        raise ConfigurationError(f"Missing configuration: {key}")
    return value


def _parse_bool(value: Optional[str]) -> bool:
    return (value or "false").strip().lower() == "true"


def load_config(settings: Mapping[str, str]) -> FunctionConfig:
    """
    Build the function configuration from environment-style settings.

    Args:
        settings: Mapping of configuration keys, usually the Fn context
            configuration merged over ``os.environ``

    Returns:
        Frozen FunctionConfig

    Raises:
        ConfigurationError: a required key is absent or a value is invalid
    """
    # Required for every provider; with aws it is carried but unused
    namespace = _required(settings, "OCI_NAMESPACE")

    provider = settings.get("GATEWAY_PROVIDER", "oci").strip().lower()
    if provider not in PROVIDERS:
        raise ConfigurationError(
            f"Invalid configuration: GATEWAY_PROVIDER={provider!r}, expected one of {PROVIDERS}"
        )

    max_results = None
    raw_max_results = settings.get("MAX_RESULTS")
    if raw_max_results:
        try:
            max_results = int(raw_max_results)
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid configuration: MAX_RESULTS={raw_max_results!r}"
            ) from exc

    identity = None
    if provider == "oci":
        identity = ResourcePrincipalIdentity(
            **{field: _required(settings, key) for field, key in IDENTITY_KEYS.items()}
        )

    return FunctionConfig(
        namespace=namespace,
        bucket_in=settings.get("BUCKET_IN", DEFAULT_BUCKET),
        bucket_out=settings.get("BUCKET_OUT", DEFAULT_BUCKET),
        debug=_parse_bool(settings.get("DEBUG")),
        provider=provider,
        max_results=max_results,
        identity=identity,
    )
