"""Single-session pick-and-pass phrase drafting game server."""

from .engine import WakaSession
from .history import HistoryLog
from .rules import SessionConfig, create_config, default_config

__all__ = ["WakaSession", "HistoryLog", "SessionConfig", "create_config", "default_config"]
