"""Session state, frame navigation, binary serialization, relay commands and HTTP interfaces for SDK-based applications."""

__version__ = "0.14.0"

__all__ = [
    "commands",
    "constants",
    "frames",
    "http",
    "navigation",
    "serialization",
    "suspension",
]