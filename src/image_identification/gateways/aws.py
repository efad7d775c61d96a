"""Amazon Web Services gateways: S3 and Rekognition."""

from typing import Any, Dict, Optional

import boto3

from ..core.exceptions import with_error_handling
from ..core.models import IMAGE_CLASSIFICATION, FeatureSet, ObjectDescriptor

DEFAULT_MAX_LABELS = 10


class Boto3SessionCredentialProvider:
    """Credentials from the default boto3 credential chain."""

    def __init__(self, **session_kwargs: Any):
        self._session_kwargs = session_kwargs

    def get_credential(self) -> boto3.Session:
        return boto3.Session(**self._session_kwargs)


class S3StorageGateway:
    """S3 storage operations; the namespace has no S3 counterpart and is ignored."""

    def __init__(self, client: Any):
        self._client = client

    @with_error_handling
    def get_object_info(
        self, namespace: str, bucket: str, name: str
    ) -> ObjectDescriptor:
        response = self._client.head_object(Bucket=bucket, Key=name)
        return ObjectDescriptor(
            namespace=namespace,
            bucket=bucket,
            object_name=name,
            content_type=response.get("ContentType"),
            size=response.get("ContentLength"),
        )

    @with_error_handling
    def put_object(
        self, namespace: str, bucket: str, name: str, body: bytes, content_type: str
    ) -> Optional[str]:
        response = self._client.put_object(
            Bucket=bucket, Key=name, Body=body, ContentType=content_type
        )
        return response.get("ETag") if response else None

    def close(self) -> None:
        self._client.close()


class RekognitionVisionGateway:
    """Label detection on images already stored in S3."""

    def __init__(self, client: Any):
        self._client = client

    @with_error_handling
    def classify_image(
        self, namespace: str, bucket: str, name: str, features: FeatureSet
    ) -> Dict[str, Any]:
        unsupported = [f for f in features.features if f != IMAGE_CLASSIFICATION]
        if unsupported:
            raise ValueError(f"Unsupported vision features: {unsupported}")

        response = self._client.detect_labels(
            Image={"S3Object": {"Bucket": bucket, "Name": name}},
            MaxLabels=features.max_results or DEFAULT_MAX_LABELS,
        )
        return {k: v for k, v in response.items() if k != "ResponseMetadata"}

    def close(self) -> None:
        self._client.close()


class AwsGatewayFactory:
    """Builds AWS gateways from a boto3 session."""

    def create_storage_gateway(self, credential: boto3.Session) -> S3StorageGateway:
        return S3StorageGateway(credential.client("s3"))

    def create_vision_gateway(
        self, credential: boto3.Session
    ) -> RekognitionVisionGateway:
        return RekognitionVisionGateway(credential.client("rekognition"))
