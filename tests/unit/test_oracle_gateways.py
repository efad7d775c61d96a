"""Unit tests for the OCI gateways using mocked SDK clients."""

from unittest.mock import Mock, patch

import oci
import pytest

from image_identification.core.config import FunctionConfig, ResourcePrincipalIdentity, load_config
from image_identification.core.exceptions import GatewayCallError
from image_identification.core.factories import GatewayFactoryProvider
from image_identification.core.models import FeatureSet
from image_identification.gateways.oracle import (
    OciGatewayFactory,
    OciObjectStorageGateway,
    OciVisionGateway,
    ResourcePrincipalCredentialProvider,
)


def service_error(status=404, code="ObjectNotFound"):
    return oci.exceptions.ServiceError(status, code, {}, "The object was not found")


class TestOciObjectStorageGateway:
    """Tests for OciObjectStorageGateway."""

    def test_get_object_info(self):
        client = Mock()
        client.head_object.return_value = Mock(
            headers={"Content-Type": "image/jpeg", "Content-Length": "2048"}
        )
        gateway = OciObjectStorageGateway(client)

        descriptor = gateway.get_object_info("ns", "images", "cat.jpg")

        client.head_object.assert_called_once_with(
            namespace_name="ns", bucket_name="images", object_name="cat.jpg"
        )
        assert descriptor.content_type == "image/jpeg"
        assert descriptor.size == 2048
        assert descriptor.major_type == "image"

    def test_get_object_info_without_length(self):
        client = Mock()
        client.head_object.return_value = Mock(headers={"Content-Type": "text/plain"})

        descriptor = OciObjectStorageGateway(client).get_object_info("ns", "b", "a.txt")

        assert descriptor.size is None

    def test_get_object_info_not_found(self):
        client = Mock()
        client.head_object.side_effect = service_error()

        with pytest.raises(GatewayCallError) as exc_info:
            OciObjectStorageGateway(client).get_object_info("ns", "b", "missing.jpg")

        assert isinstance(exc_info.value.__cause__, oci.exceptions.ServiceError)

    def test_put_object(self):
        client = Mock()
        client.put_object.return_value = Mock(headers={"etag": "etag-1"})
        gateway = OciObjectStorageGateway(client)

        etag = gateway.put_object("ns", "out", "cat.jpg-metadata.json", b"{}", "application/json")

        assert etag == "etag-1"
        client.put_object.assert_called_once_with(
            namespace_name="ns",
            bucket_name="out",
            object_name="cat.jpg-metadata.json",
            put_object_body=b"{}",
            content_type="application/json",
        )

    def test_put_object_without_response(self):
        client = Mock()
        client.put_object.return_value = None

        assert OciObjectStorageGateway(client).put_object("ns", "out", "x", b"", "application/json") is None

    def test_put_object_failure(self):
        client = Mock()
        client.put_object.side_effect = service_error(409, "Conflict")

        with pytest.raises(GatewayCallError):
            OciObjectStorageGateway(client).put_object("ns", "out", "x", b"", "application/json")

    def test_close(self):
        client = Mock()

        OciObjectStorageGateway(client).close()

        client.base_client.session.close.assert_called_once()


class TestOciVisionGateway:
    """Tests for OciVisionGateway."""

    def test_build_details(self):
        details = OciVisionGateway.build_details("ns", "images", "cat.jpg", FeatureSet())

        assert len(details.features) == 1
        assert details.features[0].feature_type == "IMAGE_CLASSIFICATION"
        assert details.features[0].max_results is None
        assert details.image.namespace_name == "ns"
        assert details.image.bucket_name == "images"
        assert details.image.object_name == "cat.jpg"

    def test_build_details_max_results(self):
        details = OciVisionGateway.build_details(
            "ns", "images", "cat.jpg", FeatureSet(max_results=3)
        )

        assert details.features[0].max_results == 3

    def test_build_details_rejects_other_features(self):
        with pytest.raises(ValueError, match="Unsupported"):
            OciVisionGateway.build_details(
                "ns", "images", "cat.jpg", FeatureSet(features=["TEXT_DETECTION"])
            )

    def test_classify_image(self):
        client = Mock()
        client.analyze_image.return_value = Mock(
            data=oci.ai_vision.models.AnalyzeImageResult(
                labels=[oci.ai_vision.models.Label(name="cat", confidence=0.97)],
                image_classification_model_version="1.5.97",
            )
        )
        gateway = OciVisionGateway(client)

        result = gateway.classify_image("ns", "images", "cat.jpg", FeatureSet())

        details = client.analyze_image.call_args.kwargs["analyze_image_details"]
        assert details.image.object_name == "cat.jpg"
        assert isinstance(result, dict)
        assert result["labels"][0]["name"] == "cat"
        assert result["labels"][0]["confidence"] == 0.97

    def test_classify_image_failure(self):
        client = Mock()
        client.analyze_image.side_effect = service_error(500, "InternalServerError")

        with pytest.raises(GatewayCallError):
            OciVisionGateway(client).classify_image("ns", "images", "cat.jpg", FeatureSet())

    def test_close(self):
        client = Mock()

        OciVisionGateway(client).close()

        client.base_client.session.close.assert_called_once()


class TestOciWiring:
    """Tests for the OCI credential provider and gateway factory."""

    def test_signer_uses_configured_identity(self):
        identity = ResourcePrincipalIdentity(
            version="2.2",
            region="us-phoenix-1",
            session_token="rpst-token",
            private_key="/.oci/key.pem",
        )

        with patch("oci.auth.signers.EphemeralResourcePrincipalSigner") as mock_signer:
            credential = ResourcePrincipalCredentialProvider(identity).get_credential()

        mock_signer.assert_called_once_with(
            session_token="rpst-token",
            private_key="/.oci/key.pem",
            region="us-phoenix-1",
        )
        assert credential is mock_signer.return_value

    def test_settings_identity_reaches_signer(self):
        """Identity supplied through the function configuration, not os.environ."""
        config = load_config(
            {
                "OCI_NAMESPACE": "mytenancy",
                "OCI_RESOURCE_PRINCIPAL_VERSION": "2.2",
                "OCI_RESOURCE_PRINCIPAL_REGION": "eu-frankfurt-1",
                "OCI_RESOURCE_PRINCIPAL_RPST": "ctx-token",
                "OCI_RESOURCE_PRINCIPAL_PRIVATE_PEM": "/ctx/key.pem",
            }
        )
        credentials, factory = GatewayFactoryProvider.create(config)

        with patch.dict("os.environ", {}, clear=True), patch(
            "oci.auth.signers.EphemeralResourcePrincipalSigner"
        ) as mock_signer:
            credentials.get_credential()

        assert isinstance(factory, OciGatewayFactory)
        mock_signer.assert_called_once_with(
            session_token="ctx-token",
            private_key="/ctx/key.pem",
            region="eu-frankfurt-1",
        )

    def test_missing_identity(self):
        with pytest.raises(ValueError, match="No resource principal identity"):
            ResourcePrincipalCredentialProvider(None).get_credential()

    def test_unsupported_identity_version(self):
        identity = ResourcePrincipalIdentity(
            version="1.1", region="r", session_token="t", private_key="k"
        )

        with pytest.raises(ValueError, match="Unsupported resource principal version: 1.1"):
            ResourcePrincipalCredentialProvider(identity).get_credential()

    def test_oci_config_without_identity_fails_construction(self):
        credentials, _ = GatewayFactoryProvider.create(FunctionConfig(namespace="ns"))

        with pytest.raises(ValueError):
            credentials.get_credential()

    def test_factory_builds_clients_with_signer(self):
        factory = OciGatewayFactory()

        with patch("oci.object_storage.ObjectStorageClient") as storage_client, patch(
            "oci.ai_vision.AIServiceVisionClient"
        ) as vision_client:
            storage = factory.create_storage_gateway("signer")
            vision = factory.create_vision_gateway("signer")

        storage_client.assert_called_once_with(config={}, signer="signer")
        vision_client.assert_called_once_with(config={}, signer="signer")
        assert isinstance(storage, OciObjectStorageGateway)
        assert isinstance(vision, OciVisionGateway)
