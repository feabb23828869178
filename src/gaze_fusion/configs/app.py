import logging
from importlib.metadata import version

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, PositiveFloat, PositiveInt, Field

from .utils import LoggingConfig
from ..core.state import ResetPolicy

logger = logging.getLogger(__name__)

class ListenerSettings(BaseModel):
    """
    Where the OSC listener binds and which address namespace it decodes.
    Port 0 asks the OS for an ephemeral port.
    """
    host: str = Field("0.0.0.0", description="Interface to bind. Defaults to all interfaces.")
    port: int = Field(9000, ge=0, le=65535, description="UDP port the tracker software sends to.")
    address_prefix: str = Field("/avatar/parameters", description="Namespace of the three channel addresses.")

class FusionSettings(BaseModel):
    reset_policy: ResetPolicy = Field(
        ResetPolicy.ALL,
        description="Which pending slots are cleared after a fuse. 'keep_vertical' keeps the legacy latch on EyesY."
    )

class SnapshotSettings(BaseModel):
    staleness_threshold_s: PositiveFloat = Field(1.0, description="Age after which a fused gaze is reported unavailable.")

class DummySenderSettings(BaseModel):
    """Simulated OSC source, useful when no tracker software is running."""
    enabled: bool = False
    target_host: str = "127.0.0.1"
    frequency_hz: PositiveInt = 60
    radius: float = Field(0.5, ge=0.0, le=1.0, description="Radius of the circular path, in normalized channel units.")
    speed: float = Field(0.25, description="Revolutions per second.")

class AppSettings(BaseSettings):
    """
    Main application settings, loaded from environment variables and defaults.
    """
    listener: ListenerSettings = Field(default_factory=ListenerSettings)
    fusion: FusionSettings = Field(default_factory=FusionSettings)
    snapshot: SnapshotSettings = Field(default_factory=SnapshotSettings)
    dummy: DummySenderSettings = Field(default_factory=DummySenderSettings)

    # Monitor
    poll_interval_s: PositiveFloat = 0.5

    # Logging
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    __version__: str = version("gaze-fusion")

    model_config = SettingsConfigDict(
        env_prefix="GAZE_FUSION__",
        env_file=".env",
        env_nested_delimiter='__',
        case_sensitive=False
    )
