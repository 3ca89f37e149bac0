from assessment_extractor.dependencies.components import get_components
from assessment_extractor.dependencies.services import (
    get_extraction_service,
    get_manifest,
)
from assessment_extractor.entities.media import MediaItem
from assessment_extractor.services.ExtractionService.extraction_service_interface import (
    ExtractionServiceInterface,
)


def bootstrap_extraction(
    env: str = "development",
    config_path: str = "configuration",
) -> tuple[ExtractionServiceInterface, list[MediaItem]]:
    components = get_components(env=env, config_path=config_path)
    manifest: list[MediaItem] = get_manifest(components)

    extraction: ExtractionServiceInterface = get_extraction_service(components)
    return extraction, manifest
