"""I/O utilities: configuration, state persistence and CSV export."""

from .config import RosterConfig, load_config
from .export_csv import export_forecast_csv, export_history_csv, history_frame
from .state_store import IniStateStore

__all__ = [
    "RosterConfig",
    "load_config",
    "IniStateStore",
    "export_forecast_csv",
    "export_history_csv",
    "history_frame",
]
