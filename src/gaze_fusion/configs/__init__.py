from .app import (
    AppSettings,
    DummySenderSettings,
    FusionSettings,
    ListenerSettings,
    SnapshotSettings,
)
from .utils import LoggingConfig

__all__ = [
    "AppSettings",
    "DummySenderSettings",
    "FusionSettings",
    "ListenerSettings",
    "LoggingConfig",
    "SnapshotSettings",
]
