"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and TEESTREAM_* environment variables. Values here
are the defaults a Distributor falls back to when its constructor
arguments are left unset.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from teestream.models.state import FanoutPolicy


class TeeStreamConfig(BaseSettings):
    """Configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export TEESTREAM_LOG_LEVEL=DEBUG
        export TEESTREAM_FANOUT_POLICY=best_effort
        export TEESTREAM_TERMINAL_CLOSE=false
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TEESTREAM_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Distributor behaviour
    terminal_close: bool = True
    fanout_policy: FanoutPolicy = FanoutPolicy.FAIL_FAST

    # CLI copy buffer
    chunk_size: int = Field(default=65536, gt=0)
