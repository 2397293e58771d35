from .logging import LEVELS, LogMessage, Logger

__all__ = ["LEVELS", "LogMessage", "Logger"]
