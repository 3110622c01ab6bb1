from dataclasses import dataclass

@dataclass
class RuntimeState:
    """Centralized runtime state"""
    ytdlp_version: str = "unknown"

state = RuntimeState()
