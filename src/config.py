"""Central configuration loaded from environment variables."""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # Server (App Runner sets PORT; the stack declares 8080)
    PORT: str = os.getenv("PORT") or "8080"
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Build info (injected by AppRunnerStack as a runtime env var)
    COMMIT_SHA: str = os.getenv("COMMIT_SHA") or "unknown"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Observability (OpenTelemetry OTLP/HTTP)
    OBSERVABILITY_ENABLED: bool = os.getenv("OBSERVABILITY_ENABLED", "false").lower() == "true"
    OTEL_EXPORTER_OTLP_ENDPOINT: str = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "")
    SERVICE_NAME: str = os.getenv("OTEL_SERVICE_NAME", "apprunner-demo")

    @classmethod
    def port(cls) -> int:
        return int(cls.PORT)

    @classmethod
    def validate(cls) -> None:
        try:
            port = cls.port()
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {cls.PORT!r}") from None
        if not 0 < port < 65536:
            raise ValueError(f"PORT must be between 1 and 65535, got {port}")


config = Config()
