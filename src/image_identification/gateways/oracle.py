"""Oracle Cloud Infrastructure gateways: Object Storage and AI Vision."""

from typing import Any, Dict, Optional

import oci

from ..core.config import ResourcePrincipalIdentity
from ..core.exceptions import with_error_handling
from ..core.models import IMAGE_CLASSIFICATION, FeatureSet, ObjectDescriptor


RESOURCE_PRINCIPAL_VERSION = "2.2"


class ResourcePrincipalCredentialProvider:
    """Credentials of the function's resource principal, taken from the loaded configuration."""

    def __init__(self, identity: Optional[ResourcePrincipalIdentity]):
        self._identity = identity

    def get_credential(self) -> Any:
        """Return a request signer for the configured session token and private key."""
        identity = self._identity
        if identity is None:
            raise ValueError("No resource principal identity configured")
        if identity.version != RESOURCE_PRINCIPAL_VERSION:
            raise ValueError(
                f"Unsupported resource principal version: {identity.version}"
            )
        # Token and key may each be a literal value or an absolute file path
        return oci.auth.signers.EphemeralResourcePrincipalSigner(
            session_token=identity.session_token,
            private_key=identity.private_key,
            region=identity.region,
        )


def _close_client(client: Any) -> None:
    client.base_client.session.close()


class OciObjectStorageGateway:
    """Object Storage operations needed by the function."""

    def __init__(self, client: oci.object_storage.ObjectStorageClient):
        self._client = client

    @with_error_handling
    def get_object_info(
        self, namespace: str, bucket: str, name: str
    ) -> ObjectDescriptor:
        response = self._client.head_object(
            namespace_name=namespace, bucket_name=bucket, object_name=name
        )
        headers = response.headers
        content_length = headers.get("Content-Length")
        return ObjectDescriptor(
            namespace=namespace,
            bucket=bucket,
            object_name=name,
            content_type=headers.get("Content-Type"),
            size=int(content_length) if content_length is not None else None,
        )

    @with_error_handling
    def put_object(
        self, namespace: str, bucket: str, name: str, body: bytes, content_type: str
    ) -> Optional[str]:
        response = self._client.put_object(
            namespace_name=namespace,
            bucket_name=bucket,
            object_name=name,
            put_object_body=body,
            content_type=content_type,
        )
        if response is None:
            return None
        return response.headers.get("etag")

    def close(self) -> None:
        _close_client(self._client)


class OciVisionGateway:
    """AI Vision image analysis on objects already in Object Storage."""

    def __init__(self, client: oci.ai_vision.AIServiceVisionClient):
        self._client = client

    @staticmethod
    def build_details(
        namespace: str, bucket: str, name: str, features: FeatureSet
    ) -> oci.ai_vision.models.AnalyzeImageDetails:
        """Build the analyze request for an object storage image."""
        unsupported = [f for f in features.features if f != IMAGE_CLASSIFICATION]
        if unsupported:
            raise ValueError(f"Unsupported vision features: {unsupported}")

        feature_kwargs = {}
        if features.max_results is not None:
            feature_kwargs["max_results"] = features.max_results

        return oci.ai_vision.models.AnalyzeImageDetails(
            features=[oci.ai_vision.models.ImageClassificationFeature(**feature_kwargs)],
            image=oci.ai_vision.models.ObjectStorageImageDetails(
                namespace_name=namespace,
                bucket_name=bucket,
                object_name=name,
            ),
        )

    @with_error_handling
    def classify_image(
        self, namespace: str, bucket: str, name: str, features: FeatureSet
    ) -> Dict[str, Any]:
        details = self.build_details(namespace, bucket, name, features)
        response = self._client.analyze_image(analyze_image_details=details)
        return oci.util.to_dict(response.data)

    def close(self) -> None:
        _close_client(self._client)


class OciGatewayFactory:
    """Builds OCI gateways from a resource principal signer."""

    def create_storage_gateway(self, credential: Any) -> OciObjectStorageGateway:
        client = oci.object_storage.ObjectStorageClient(config={}, signer=credential)
        return OciObjectStorageGateway(client)

    def create_vision_gateway(self, credential: Any) -> OciVisionGateway:
        client = oci.ai_vision.AIServiceVisionClient(config={}, signer=credential)
        return OciVisionGateway(client)
