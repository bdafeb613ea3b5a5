"""
Logging utility module
"""
import inspect
import logging
import logging.config
import time
import functools
from pathlib import Path
from typing import Callable, Any, Optional
import yaml
from config.settings import settings


def setup_logging(config_path: Optional[str] = None) -> None:
    """
    Initialize logging

    Args:
        config_path: logging config file path (defaults to settings.log_config_path)
    """
    config_file = Path(config_path or settings.log_config_path)

    if config_file.exists():
        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
            logging.config.dictConfig(config)
    else:
        # Default logging config
        logging.basicConfig(
            level=getattr(logging, settings.log_level.upper()),
            format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger

    Args:
        name: logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_execution_time(logger: logging.Logger = None):
    """
    Decorator measuring function execution time, for plain and async functions

    Args:
        logger: logger instance (None creates one from the function's module)
    """
    def decorator(func: Callable) -> Callable:
        def _log() -> logging.Logger:
            return logger if logger is not None else get_logger(func.__module__)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs) -> Any:
                log = _log()
                start_time = time.time()
                try:
                    result = await func(*args, **kwargs)
                    log.info(
                        f"{func.__name__} finished in {time.time() - start_time:.3f}s"
                    )
                    return result
                except Exception as e:
                    log.error(
                        f"{func.__name__} failed after {time.time() - start_time:.3f}s: {str(e)}"
                    )
                    raise

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            log = _log()
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                log.info(
                    f"{func.__name__} finished in {time.time() - start_time:.3f}s"
                )
                return result
            except Exception as e:
                log.error(
                    f"{func.__name__} failed after {time.time() - start_time:.3f}s: {str(e)}"
                )
                raise

        return wrapper
    return decorator
