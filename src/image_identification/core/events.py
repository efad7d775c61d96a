"""Decoding of OCI Events (CloudEvents 1.0) object storage notifications."""

from typing import Any, Dict, Mapping, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import DecodingError
from .models import EventNotification

Payload = Union[bytes, bytearray, str, Mapping[str, Any]]


class ObjectEventData(BaseModel):
    """The ``data`` block of an object storage event."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    resource_name: str = Field(alias="resourceName", min_length=1)
    additional_details: Dict[str, Any] = Field(
        default_factory=dict, alias="additionalDetails"
    )


class ObjectStorageCloudEvent(BaseModel):
    """Envelope delivered by the events service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    event_type: Optional[str] = Field(default=None, alias="eventType")
    event_id: Optional[str] = Field(default=None, alias="eventID")
    source: Optional[str] = None
    data: ObjectEventData


def decode_event(payload: Payload) -> EventNotification:
    """Parse an event payload and return the object that triggered it."""
    if payload is None:
        raise DecodingError("Empty event payload")

    try:
        if isinstance(payload, Mapping):
            event = ObjectStorageCloudEvent.model_validate(payload)
        else:
            event = ObjectStorageCloudEvent.model_validate_json(payload)

        details = event.data.additional_details
        return EventNotification(
            resource_name=event.data.resource_name,
            bucket_name=details.get("bucketName"),
            namespace=details.get("namespace"),
            event_type=event.event_type,
            event_id=event.event_id,
        )
    except ValidationError as exc:
        raise DecodingError(f"Invalid event payload: {exc}") from exc
