"""Request handling for the image identification function."""

import time
from contextlib import ExitStack
from typing import Any, Optional, Tuple

from .config import FunctionConfig
from .events import Payload, decode_event
from .exceptions import (
    GatewayCallError,
    GatewayConstructionError,
    ImageIdentificationError,
    PreconditionError,
)
from .models import (
    IMAGE_MAJOR_TYPE,
    RESULT_CONTENT_TYPE,
    RESULT_SUFFIX,
    FeatureSet,
    IdentificationOutcome,
)
from .observability import LogContext
from .protocols import (
    CredentialProvider,
    GatewayFactory,
    LoggerProtocol,
    StorageGateway,
    VisionGateway,
)
from .serialization import serialize_result


def result_object_name(object_name: str) -> str:
    """Name of the sidecar object holding the analysis of ``object_name``."""
    return object_name + RESULT_SUFFIX


class ImageIdentificationService:
    """
    Handles one object storage event end to end.

    Reads the content type of the uploaded object, classifies it with the
    vision gateway when it is an image, and writes the indented JSON result
    to ``<object>-metadata.json`` in the output bucket. Every failure is
    logged and reported to the caller as the generic error outcome.
    """

    def __init__(
        self,
        config: FunctionConfig,
        credential_provider: CredentialProvider,
        gateway_factory: GatewayFactory,
        logger: LoggerProtocol,
    ):
        self._config = config
        self._credential_provider = credential_provider
        self._gateway_factory = gateway_factory
        self._logger = logger
        self._features = FeatureSet(max_results=config.max_results)

    @property
    def config(self) -> FunctionConfig:
        return self._config

    def handle(self, payload: Payload) -> IdentificationOutcome:
        """Process a single event payload and return its outcome."""
        start_time = time.time()
        log_context = LogContext(
            operation="handle_event", component="image_identification_service"
        )

        if self._config.debug:
            self._logger.debug(
                "Function configuration", log_context, **self._config.describe()
            )

        try:
            self._check_preconditions()

            with ExitStack() as stack:
                storage, vision = self._open_gateways(stack)

                event = decode_event(payload)
                log_context = log_context.with_metadata(file_name=event.resource_name)

                outcome = self._identify(event.resource_name, storage, vision, log_context)
        except ImageIdentificationError as e:
            error_context = log_context.with_metadata(
                error_type=type(e).__name__, error=str(e)
            )
            self._logger.error("Error during identification of image", error_context)
            outcome = IdentificationOutcome.failed()
        except Exception as e:  # noqa: BLE001
            error_context = log_context.with_metadata(
                error_type=type(e).__name__, error=str(e)
            )
            self._logger.error(
                "Unexpected error during identification of image", error_context
            )
            outcome = IdentificationOutcome.failed()

        self._logger.info(
            outcome.message,
            log_context,
            status=outcome.status.value,
            processing_time_ms=(time.time() - start_time) * 1000,
        )
        return outcome

    def _identify(
        self,
        file_name: str,
        storage: StorageGateway,
        vision: VisionGateway,
        log_context: LogContext,
    ) -> IdentificationOutcome:
        major_type = self._resolve_major_type(storage, file_name, log_context)
        if major_type != IMAGE_MAJOR_TYPE:
            self._logger.warning(
                "This file is not an image or is not a supported format",
                log_context.with_metadata(major_type=major_type),
            )
            return IdentificationOutcome.not_image()

        self._logger.info("Analyzing file", log_context.with_operation("classify_image"))
        result = vision.classify_image(
            self._config.namespace, self._config.bucket_in, file_name, self._features
        )

        results_file = result_object_name(file_name)
        publish_context = log_context.with_operation("publish_result").with_metadata(
            results_file=results_file
        )
        body = serialize_result(result).encode("utf-8")

        self._logger.info("Writing results", publish_context)
        confirmation = storage.put_object(
            self._config.namespace,
            self._config.bucket_out,
            results_file,
            body,
            RESULT_CONTENT_TYPE,
        )
        if not confirmation:
            self._logger.error("Error creating results file", publish_context)
            return IdentificationOutcome.failed()

        self._logger.info(
            "Created results file", publish_context.with_metadata(etag=confirmation)
        )
        return IdentificationOutcome.completed(self._config.bucket_out, results_file)

    def _check_preconditions(self) -> None:
        missing = [
            key
            for key, value in (
                ("OCI_NAMESPACE", self._config.namespace),
                ("BUCKET_IN", self._config.bucket_in),
                ("BUCKET_OUT", self._config.bucket_out),
            )
            if not value
        ]
        if missing:
            raise PreconditionError(
                f"The required settings {', '.join(missing)} are empty. "
                "Please configure them before proceeding."
            )

    def _open_gateways(self, stack: ExitStack) -> Tuple[StorageGateway, VisionGateway]:
        """Build both gateways; each is closed by ``stack`` once acquired."""
        try:
            credential = self._credential_provider.get_credential()
        except Exception as e:
            raise GatewayConstructionError(f"Could not obtain credentials: {e}") from e

        storage = self._build("storage", self._gateway_factory.create_storage_gateway, credential)
        stack.callback(storage.close)

        vision = self._build("vision", self._gateway_factory.create_vision_gateway, credential)
        stack.callback(vision.close)

        return storage, vision

    @staticmethod
    def _build(kind: str, create: Any, credential: Any) -> Any:
        try:
            gateway = create(credential)
        except Exception as e:
            raise GatewayConstructionError(
                f"There was a problem creating the {kind} gateway: {e}"
            ) from e
        if gateway is None:
            raise GatewayConstructionError(
                f"There was a problem creating the {kind} gateway"
            )
        return gateway

    def _resolve_major_type(
        self, storage: StorageGateway, file_name: str, log_context: LogContext
    ) -> str:
        descriptor = storage.get_object_info(
            self._config.namespace, self._config.bucket_in, file_name
        )
        content_type: Optional[str] = descriptor.content_type
        if content_type is None:
            raise GatewayCallError(f"Object {file_name} has no content type")

        self._logger.debug(
            "Resolved content type", log_context, content_type=content_type
        )
        return descriptor.major_type
