from .session import SessionEventRelay

__all__ = [
    "SessionEventRelay",
]
