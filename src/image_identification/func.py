"""Fn / OCI Functions entry point (``image_identification.func:handler``)."""

import io
import os
from typing import Any, Dict, Optional

from fdk import response

from .core.factories import ServiceFactory
from .core.services import ImageIdentificationService

_service: Optional[ImageIdentificationService] = None


def _settings(ctx: Any) -> Dict[str, str]:
    settings = dict(os.environ)
    settings.update(ctx.Config() or {})
    return settings


def get_service(ctx: Any) -> ImageIdentificationService:
    """Build the service on the first invocation and reuse it afterwards.

    Raises:
        ConfigurationError: a required setting is missing; the function
            cannot serve until it is reconfigured
    """
    global _service
    if _service is None:
        _service = ServiceFactory.from_settings(_settings(ctx))
    return _service


def reset_service() -> None:
    """Forget the cached service (used when configuration changes)."""
    global _service
    _service = None


def handler(ctx: Any, data: Optional[io.BytesIO] = None) -> response.Response:
    """Handle one Oracle Events object storage notification."""
    payload = data.getvalue() if data is not None else b""
    outcome = get_service(ctx).handle(payload)
    return response.Response(
        ctx,
        response_data=outcome.message,
        headers={"Content-Type": "text/plain"},
    )
