import asyncio
import logging
import os
import sys

from assessment_extractor.bootstrap.bootstrapper import bootstrap_extraction
from assessment_extractor.entities.errors import ExtractionRunError
from assessment_extractor.services.ExtractionService.extraction_service_interface import (
    ExtractionServiceInterface,
)


async def main() -> int:
    extraction: ExtractionServiceInterface
    extraction, manifest = bootstrap_extraction(
        env=os.getenv("APP_ENV", "development")
    )

    try:
        response = await extraction.run(manifest)
    except ExtractionRunError as e:
        logging.getLogger("main").error("Extraction aborted: %s", e)
        return 1

    print(response.usage)
    print(response.text)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
