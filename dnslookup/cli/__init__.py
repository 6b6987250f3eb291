from .app import LookupArgs, LookupCommand, main, run

__all__ = [
    "LookupArgs",
    "LookupCommand",
    "main",
    "run",
]
