"""Testing utilities and fakes for the image identification function."""

from .fakes import (
    Bucket,
    FakeCredentialProvider,
    FakeGatewayFactory,
    FakeLogger,
    FakeStorageGateway,
    FakeVisionGateway,
    StoredObject,
    create_test_image,
    make_object_event,
    setup_test_storage_environment,
)

__all__ = [
    "Bucket",
    "FakeCredentialProvider",
    "FakeGatewayFactory",
    "FakeLogger",
    "FakeStorageGateway",
    "FakeVisionGateway",
    "StoredObject",
    "create_test_image",
    "make_object_event",
    "setup_test_storage_environment",
]
