"""Protocol definitions for dependency injection and testability."""

from typing import Any, Dict, Optional, Protocol

from .models import FeatureSet, ObjectDescriptor


class StorageGateway(Protocol):
    """Protocol for object storage operations."""

    def get_object_info(
        self, namespace: str, bucket: str, name: str
    ) -> ObjectDescriptor:
        """Get the descriptor (including content type) of a stored object."""
        ...

    def put_object(
        self, namespace: str, bucket: str, name: str, body: bytes, content_type: str
    ) -> Optional[str]:
        """Write an object and return the store's confirmation (ETag)."""
        ...

    def close(self) -> None:
        """Release the underlying client."""
        ...


class VisionGateway(Protocol):
    """Protocol for image analysis operations."""

    def classify_image(
        self, namespace: str, bucket: str, name: str, features: FeatureSet
    ) -> Dict[str, Any]:
        """Classify a stored image and return the provider's structured result."""
        ...

    def close(self) -> None:
        """Release the underlying client."""
        ...


class CredentialProvider(Protocol):
    """Protocol for the platform-supplied authentication capability."""

    def get_credential(self) -> Any:
        """Return an opaque credential handle used to build gateways."""
        ...


class GatewayFactory(Protocol):
    """Protocol for building request-scoped gateway handles."""

    def create_storage_gateway(self, credential: Any) -> StorageGateway:
        ...

    def create_vision_gateway(self, credential: Any) -> VisionGateway:
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log error message."""
        ...
