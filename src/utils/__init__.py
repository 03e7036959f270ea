from .logger import get_logger, log_exception, setup_logging

__all__ = ["setup_logging", "get_logger", "log_exception"]
