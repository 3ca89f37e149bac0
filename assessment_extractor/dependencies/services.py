from pathlib import Path

from google import genai

from assessment_extractor.bootstrap.components import Components
from assessment_extractor.components.configuration.configuration_interface import (
    ConfigurationInterface,
)
from assessment_extractor.components.configuration.manifest import load_manifest
from assessment_extractor.entities.media import MediaItem
from assessment_extractor.entities.payload import GenerationSettings
from assessment_extractor.services.DispatchService.dispatch_service import (
    DispatchService,
)
from assessment_extractor.services.DispatchService.dispatch_service_interface import (
    DispatchServiceInterface,
)
from assessment_extractor.services.ExtractionService.extraction_service import (
    ExtractionService,
)
from assessment_extractor.services.ExtractionService.extraction_service_interface import (
    ExtractionServiceInterface,
)
from assessment_extractor.services.InferenceService.gemini_inference_service import (
    GeminiInferenceService,
)
from assessment_extractor.services.InferenceService.inference_service_interface import (
    InferenceServiceInterface,
)
from assessment_extractor.services.PayloadService.payload_service import (
    PayloadService,
)
from assessment_extractor.services.PayloadService.payload_service_interface import (
    PayloadServiceInterface,
)
from assessment_extractor.services.ReadinessService.readiness_service import (
    ReadinessService,
)
from assessment_extractor.services.ReadinessService.readiness_service_interface import (
    ReadinessServiceInterface,
)
from assessment_extractor.services.StorageService.gemini_storage_service import (
    GeminiStorageService,
)
from assessment_extractor.services.StorageService.storage_service_interface import (
    StorageServiceInterface,
)
from assessment_extractor.services.UploadService.upload_service import UploadService
from assessment_extractor.services.UploadService.upload_service_interface import (
    UploadServiceInterface,
)

PROMPT_PATH = (
    Path(__file__).resolve().parents[1] / "prompts" / "assessment_extraction.prompt"
)

DEFAULT_TRAILING_MESSAGE = (
    "Here is my file. Please adhere to your system instructions. Thanks"
)


def get_instruction_text(components: Components) -> str:
    """
    Load the system instruction (including the JSON response contract).

    Falls back to the SYSTEM_PROMPT configuration key when the prompt file is
    not available.
    """
    try:
        return PROMPT_PATH.read_text(encoding="utf-8")
    except OSError:
        configuration = components.get_component(ConfigurationInterface)
        return configuration.get_configuration("SYSTEM_PROMPT", str)


def get_manifest(components: Components) -> list[MediaItem]:
    configuration = components.get_component(ConfigurationInterface)

    entries = configuration.get_configuration("MANIFEST", list)
    base_dir = configuration.get_configuration("MANIFEST_BASE_DIR", str, default=".")

    return load_manifest(entries, base_dir)


def get_storage_service(components: Components) -> StorageServiceInterface:
    return GeminiStorageService(
        client=components.get_component(genai.Client),
        logger=components.get_logger("StorageService"),
    )


def get_inference_service(components: Components) -> InferenceServiceInterface:
    configuration = components.get_component(ConfigurationInterface)

    settings = GenerationSettings(
        model_name=configuration.get_configuration("MODEL_NAME", str),
        temperature=configuration.get_configuration(
            "LLM_TEMPERATURE", float, default=1.0
        ),
        max_output_tokens=configuration.get_configuration(
            "LLM_MAX_TOKENS", int, default=8192
        ),
        response_mime_type=configuration.get_configuration(
            "RESPONSE_MIME_TYPE", str, default="application/json"
        ),
    )

    return GeminiInferenceService(
        client=components.get_component(genai.Client),
        settings=settings,
        logger=components.get_logger("InferenceService"),
    )


def get_upload_service(
    components: Components, storage_service: StorageServiceInterface
) -> UploadServiceInterface:
    return UploadService(
        storage_service=storage_service,
        logger=components.get_logger("UploadService"),
    )


def get_readiness_service(
    components: Components, storage_service: StorageServiceInterface
) -> ReadinessServiceInterface:
    configuration = components.get_component(ConfigurationInterface)

    max_attempts = configuration.get_configuration(
        "POLL_MAX_ATTEMPTS", int, default=60
    )
    max_wait = configuration.get_configuration(
        "POLL_MAX_WAIT_SECONDS", float, default=None
    )

    return ReadinessService(
        storage_service=storage_service,
        logger=components.get_logger("ReadinessService"),
        poll_interval=configuration.get_configuration(
            "POLL_INTERVAL_SECONDS", float, default=10.0
        ),
        # 0 disables the attempt limit
        max_attempts=max_attempts or None,
        max_wait_seconds=max_wait,
    )


def get_payload_service(components: Components) -> PayloadServiceInterface:
    configuration = components.get_component(ConfigurationInterface)

    return PayloadService(
        leading_text=configuration.get_configuration(
            "PAYLOAD_LEADING_TEXT", str, default=None
        ),
        trailing_text=configuration.get_configuration(
            "PAYLOAD_TRAILING_TEXT", str, default=None
        ),
    )


def get_dispatch_service(components: Components) -> DispatchServiceInterface:
    return DispatchService(
        inference_service=get_inference_service(components),
        logger=components.get_logger("DispatchService"),
    )


def get_extraction_service(components: Components) -> ExtractionServiceInterface:
    configuration = components.get_component(ConfigurationInterface)
    storage_service = get_storage_service(components)

    return ExtractionService(
        upload_service=get_upload_service(components, storage_service),
        readiness_service=get_readiness_service(components, storage_service),
        payload_service=get_payload_service(components),
        dispatch_service=get_dispatch_service(components),
        instruction_text=get_instruction_text(components),
        trailing_message=configuration.get_configuration(
            "TRAILING_MESSAGE", str, default=DEFAULT_TRAILING_MESSAGE
        ),
        logger=components.get_logger("ExtractionService"),
    )
