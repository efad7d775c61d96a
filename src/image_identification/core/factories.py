"""Factory classes for creating configured service instances."""

from typing import Any, Mapping, Optional, Tuple

from .config import FunctionConfig, load_config
from .exceptions import ConfigurationError
from .logging_config import configure_logging
from .observability import StructuredLogger
from .protocols import CredentialProvider, GatewayFactory, LoggerProtocol
from .services import ImageIdentificationService


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(name: str = "service") -> LoggerProtocol:
        """Create a structured logger under the function's parent logger."""
        return StructuredLogger(name)


class GatewayFactoryProvider:
    """Factory for the credential provider and gateway factory of a cloud provider."""

    @staticmethod
    def create(config: FunctionConfig) -> Tuple[CredentialProvider, GatewayFactory]:
        """Return the provider-specific credential provider and gateway factory."""
        # Imported lazily so only the selected cloud SDK is loaded.
        if config.provider == "oci":
            from ..gateways.oracle import OciGatewayFactory, ResourcePrincipalCredentialProvider

            return ResourcePrincipalCredentialProvider(config.identity), OciGatewayFactory()

        if config.provider == "aws":
            from ..gateways.aws import AwsGatewayFactory, Boto3SessionCredentialProvider

            return Boto3SessionCredentialProvider(), AwsGatewayFactory()

        raise ConfigurationError(f"Unsupported gateway provider: {config.provider}")


class ServiceFactory:
    """Factory for creating the complete identification service."""

    @staticmethod
    def create_service(
        config: FunctionConfig,
        credential_provider: Optional[CredentialProvider] = None,
        gateway_factory: Optional[GatewayFactory] = None,
        logger: Optional[LoggerProtocol] = None,
    ) -> ImageIdentificationService:
        """Create a fully configured service."""
        configure_logging(debug=config.debug)

        if credential_provider is None or gateway_factory is None:
            default_credentials, default_gateways = GatewayFactoryProvider.create(config)
            credential_provider = credential_provider or default_credentials
            gateway_factory = gateway_factory or default_gateways

        if logger is None:
            logger = LoggerFactory.create_logger()

        return ImageIdentificationService(
            config=config,
            credential_provider=credential_provider,
            gateway_factory=gateway_factory,
            logger=logger,
        )

    @staticmethod
    def from_settings(settings: Mapping[str, str], **overrides: Any) -> ImageIdentificationService:
        """Load configuration from ``settings`` and create the service."""
        return ServiceFactory.create_service(load_config(settings), **overrides)
