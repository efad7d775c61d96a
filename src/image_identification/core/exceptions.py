"""Custom exceptions and error handling utilities for the image identification function."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, TypeVar

from .logging_config import get_logger


class ImageIdentificationError(Exception):
    """Base exception for all image identification errors."""


class ConfigurationError(ImageIdentificationError):
    """A required setting is missing or invalid at initialization."""


class PreconditionError(ImageIdentificationError):
    """Required configuration values are present but empty."""


class GatewayConstructionError(ImageIdentificationError):
    """A storage or vision gateway handle could not be built."""


class DecodingError(ImageIdentificationError):
    """The event payload is malformed or misses the resource name."""


class GatewayCallError(ImageIdentificationError):
    """A read, write or classify call to an external service failed."""


F = TypeVar("F", bound=Callable[..., Any])


def with_error_handling(func: F) -> F:
    """Wrap a gateway call so provider failures surface as GatewayCallError."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:  # type: ignore[override]
        logger = get_logger("gateways")
        try:
            return func(*args, **kwargs)
        except ImageIdentificationError:
            logger.error("Gateway error", exc_info=True)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Unhandled error in {func.__name__}: {exc}", exc_info=True)
            raise GatewayCallError(f"{func.__name__} failed: {exc}") from exc

    return wrapper  # type: ignore[return-value]
