"""Core utilities and shared components for the image identification function."""

from .logging_config import configure_logging, get_logger
from .exceptions import (
    ImageIdentificationError,
    ConfigurationError,
    PreconditionError,
    GatewayConstructionError,
    DecodingError,
    GatewayCallError,
    with_error_handling,
)
from .models import (
    ERROR_MESSAGE,
    NOT_IMAGE_MESSAGE,
    RESULT_SUFFIX,
    EventNotification,
    FeatureSet,
    IdentificationOutcome,
    ObjectDescriptor,
    OutcomeStatus,
)
from .config import FunctionConfig, ResourcePrincipalIdentity, load_config
from .events import decode_event
from .serialization import serialize_result
from .services import ImageIdentificationService, result_object_name
from .factories import ServiceFactory

__all__ = [
    "configure_logging",
    "get_logger",
    "ImageIdentificationError",
    "ConfigurationError",
    "PreconditionError",
    "GatewayConstructionError",
    "DecodingError",
    "GatewayCallError",
    "with_error_handling",
    "ERROR_MESSAGE",
    "NOT_IMAGE_MESSAGE",
    "RESULT_SUFFIX",
    "EventNotification",
    "FeatureSet",
    "IdentificationOutcome",
    "ObjectDescriptor",
    "OutcomeStatus",
    "FunctionConfig",
    "ResourcePrincipalIdentity",
    "load_config",
    "decode_event",
    "serialize_result",
    "ImageIdentificationService",
    "result_object_name",
    "ServiceFactory",
]
