from pydantic_settings import BaseSettings, SettingsConfigDict

class TraceflowSettings(BaseSettings):
    """
    Centralized configuration for the Traceflow plugin.
    Reads from environment variables, .env file, and defaults.
    """
    # Plugin RPC server
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8090

    # Traceflow custom resource coordinates
    CRD_GROUP: str = "antrea.tanzu.vmware.com"
    CRD_VERSION: str = "v1"
    CRD_PLURAL: str = "traceflows"

    # Where the dashboard shows the full resource detail
    DETAIL_BASE_PATH: str = "/cluster-overview/custom-resources/traceflows.antrea.tanzu.vmware.com"

    # Kubernetes API calls
    REQUEST_TIMEOUT: float = 10.0
    LIST_PAGE_SIZE: int = 100

    LOG_LEVEL: str = "INFO"

    # Load from .env file if present
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TRACEFLOW_",  # Variables must start with TRACEFLOW_, e.g., TRACEFLOW_SERVER_PORT
        extra='ignore'
    )

# Instantiate global settings object
settings = TraceflowSettings()
