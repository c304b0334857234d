from .logging import configure_logging, log_calls

__all__ = ["configure_logging", "log_calls"]
