#!filepath: tickmedian/config/__init__.py
from .app_config import AppConfig
from .log_config import LogConfig
from .main_config import MainConfig

__all__ = ["AppConfig", "LogConfig", "MainConfig"]
