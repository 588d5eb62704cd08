#!filepath: tickmedian/__init__.py

__version__ = "0.1.0"

from .utils.logger import Logging, logs
from .utils.filesystem import FileSystem
from .config.app_config import AppConfig

__all__ = [
    "logs", "Logging",
    "FileSystem",
    "AppConfig",
    "__version__",
]
