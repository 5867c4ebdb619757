"""
Configuration classes for Bitwarden Serve SDK.
"""

from pydantic import BaseModel, ConfigDict, Field


class ClientConfig(BaseModel):
    """Configuration for Bitwarden client."""
    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(30.0, description="Request timeout in seconds")
    max_connections: int = Field(10, description="Maximum number of connections")

    # Logging configuration
    log_requests: bool = Field(False, description="Whether to log HTTP requests")
    log_responses: bool = Field(False, description="Whether to log HTTP responses")


class ServeConfig(BaseModel):
    """Configuration for the supervised ``bw serve`` process."""
    model_config = ConfigDict(extra="forbid")

    bw_path: str = Field("bw", description="Path to the Bitwarden CLI binary")
    host: str = Field("localhost", description="Hostname the server binds to")
    port: int = Field(4628, description="Port the server listens on")

    startup_timeout: float = Field(10.0, description="Seconds to wait for the server to listen")
    poll_interval: float = Field(0.1, description="Seconds between readiness probes")
    shutdown_timeout: float = Field(5.0, description="Seconds to wait after terminate before kill")
