import logging
import os
from pathlib import Path
from typing import Any, TypeVar, cast

from dotenv import load_dotenv
from google import genai
from openinference.instrumentation.google_genai import GoogleGenAIInstrumentor

from assessment_extractor.components.configuration.configuration import (
    Configuration,
)
from assessment_extractor.components.configuration.configuration_interface import (
    ConfigurationInterface,
)


load_dotenv()


def _is_test_environment() -> bool:
    """
    Check if we are running in a test environment.

    Returns:
        True if running under pytest or if TESTING env var is set, False otherwise.
    """
    import sys

    # Check if pytest is in the command line arguments
    if any("pytest" in arg for arg in sys.argv):
        return True

    # Check for TESTING environment variable
    if os.getenv("TESTING", "").lower() in ("true", "1", "yes"):
        return True

    return False


def _validate_otel_env_vars() -> None:
    """
    Validate OpenTelemetry/Langfuse environment variables for instrumentation.

    Two configuration paths are supported:

    1.  **Langfuse Native Integration:** If `LANGFUSE_PUBLIC_KEY`, `LANGFUSE_SECRET_KEY`,
        and `LANGFUSE_BASE_URL` are all set, validation is skipped.

    2.  **Manual OpenTelemetry Configuration:** Otherwise both
        `OTEL_EXPORTER_OTLP_ENDPOINT` and `OTEL_EXPORTER_OTLP_HEADERS` must be set.

    Raises:
        RuntimeError: If the variables required for manual OpenTelemetry
                      configuration are missing or empty.
    """

    otel_endpoint: str = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "").strip()
    otel_headers: str = os.getenv("OTEL_EXPORTER_OTLP_HEADERS", "").strip()

    langfuse_public_key: str = os.getenv("LANGFUSE_PUBLIC_KEY", "").strip()
    langfuse_secret_key: str = os.getenv("LANGFUSE_SECRET_KEY", "").strip()
    langfuse_base_url: str = os.getenv("LANGFUSE_BASE_URL", "").strip()

    if langfuse_public_key and langfuse_secret_key and langfuse_base_url:
        return  # Skip validation if Langfuse integration is used

    if not otel_endpoint:
        raise RuntimeError(
            "OTEL_EXPORTER_OTLP_ENDPOINT environment variable is not set or is empty. "
            "Please set the OTEL_EXPORTER_OTLP_ENDPOINT environment variable with a valid OTLP endpoint URL."
        )

    if not otel_headers:
        raise RuntimeError(
            "OTEL_EXPORTER_OTLP_HEADERS environment variable is not set or is empty, "
            "and LANGFUSE_PUBLIC_KEY/LANGFUSE_SECRET_KEY are not available to build headers. "
            "Please set either OTEL_EXPORTER_OTLP_HEADERS directly (e.g., 'Authorization=Basic <base64_credentials>') "
            "or provide LANGFUSE_PUBLIC_KEY and LANGFUSE_SECRET_KEY to build the headers automatically."
        )


def configure_tracing(enabled: bool) -> bool:
    """
    Instrument Google GenAI calls when tracing is enabled.

    Never instruments under pytest. Returns True if instrumentation was applied.
    """
    if not enabled or _is_test_environment():
        return False

    _validate_otel_env_vars()
    GoogleGenAIInstrumentor().instrument()
    return True


T = TypeVar("T")


class Components:
    """
    Registry of the shared objects for one extraction run.

    Each instance builds its own Gemini client, so the client's lifetime is
    the lifetime of whoever created the registry.
    """

    def __init__(self, env: str, config_path: str) -> None:
        self.__env: str = env
        root_dir: str = str(Path(__file__).resolve().parents[2])
        self.__config_path: str = os.path.join(root_dir, config_path)
        self.__components: dict[type[Any], Any] = self.__bootstrap_components()

    def __bootstrap_components(self) -> dict[type[Any], Any]:
        if self.__env in {"development", "staging", "production"}:
            return self.__get_components()

        raise ValueError(f"Invalid environment: {self.__env}")

    def __get_components(self) -> dict[type[Any], Any]:
        configuration: ConfigurationInterface = Configuration(
            self.__env, self.__config_path
        )

        logging.basicConfig(
            format=configuration.get_configuration(
                "LOG_FORMAT",
                str,
                default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            ),
            level=configuration.get_configuration("LOG_LEVEL", str, default="INFO"),
        )
        _logger_instance = self.get_logger("Components")

        tracing_enabled = configure_tracing(
            configuration.get_configuration("TRACING_ENABLED", bool, default=False)
        )

        # Gemini client setup
        api_key: str = os.getenv("GEMINI_API_KEY", "").strip()
        if not api_key:
            raise ValueError(
                "Environment variable GEMINI_API_KEY must be set with a valid API key."
            )

        gemini_client: genai.Client = genai.Client(api_key=api_key)

        _logger_instance.info(
            "Components ready for env=%s (tracing=%s)", self.__env, tracing_enabled
        )

        components: dict[type[Any], Any] = {
            ConfigurationInterface: configuration,
            genai.Client: gemini_client,
        }

        return components

    def get_component(self, component_name: type[T]) -> T:
        if component_name not in self.__components:
            raise ValueError(f"Component {component_name} not found")

        return cast(T, self.__components[component_name])

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)
