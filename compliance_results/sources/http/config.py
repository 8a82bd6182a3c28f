"""Configuration for the HTTP source."""

from pydantic import BaseModel, Field, SecretStr


class HttpSourceConfig(BaseModel):
    """Configuration for the HTTP source."""

    url: str
    token: SecretStr | None = None
    chunk_size: int = Field(default=64 * 1024, gt=0)
    pipe_capacity: int = Field(default=4, gt=0)
    # Total request timeout in seconds, None for no limit
    timeout: float | None = 300
