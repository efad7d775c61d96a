"""Shared data models for the image identification function."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

ERROR_MESSAGE = "Error during the identification process, please check logs."
NOT_IMAGE_MESSAGE = "This file is not an image or is not a supported format."
SUCCESS_MESSAGE = "Image identification completed, please see the output in bucket {bucket}"

RESULT_SUFFIX = "-metadata.json"
RESULT_CONTENT_TYPE = "application/json"
IMAGE_MAJOR_TYPE = "image"

IMAGE_CLASSIFICATION = "IMAGE_CLASSIFICATION"


class EventNotification(BaseModel):
    """The object that triggered one invocation."""

    model_config = ConfigDict(frozen=True)

    resource_name: str
    bucket_name: Optional[str] = None
    namespace: Optional[str] = None
    event_type: Optional[str] = None
    event_id: Optional[str] = None


class ObjectDescriptor(BaseModel):
    """Read-only view of a stored object."""

    model_config = ConfigDict(frozen=True)

    namespace: str
    bucket: str
    object_name: str
    content_type: Optional[str] = None
    size: Optional[int] = None

    @property
    def major_type(self) -> str:
        """First '/'-delimited token of the content type."""
        if self.content_type is None:
            raise ValueError(f"Object {self.object_name} has no content type")
        return self.content_type.split("/", 1)[0]


class FeatureSet(BaseModel):
    """Features requested from the vision service."""

    model_config = ConfigDict(frozen=True)

    features: List[str] = Field(default_factory=lambda: [IMAGE_CLASSIFICATION])
    max_results: Optional[int] = None


class OutcomeStatus(str, Enum):
    """Terminal states of one invocation."""

    COMPLETED = "completed"
    NOT_IMAGE = "not_image"
    FAILED = "failed"


class IdentificationOutcome(BaseModel):
    """Result of handling a single event."""

    status: OutcomeStatus
    message: str
    output_object: Optional[str] = None

    @classmethod
    def completed(cls, bucket_out: str, output_object: str) -> "IdentificationOutcome":
        return cls(
            status=OutcomeStatus.COMPLETED,
            message=SUCCESS_MESSAGE.format(bucket=bucket_out),
            output_object=output_object,
        )

    @classmethod
    def not_image(cls) -> "IdentificationOutcome":
        return cls(status=OutcomeStatus.NOT_IMAGE, message=NOT_IMAGE_MESSAGE)

    @classmethod
    def failed(cls) -> "IdentificationOutcome":
        return cls(status=OutcomeStatus.FAILED, message=ERROR_MESSAGE)

    @property
    def success(self) -> bool:
        return self.status is not OutcomeStatus.FAILED
