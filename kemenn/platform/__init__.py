"""Platform abstraction layer."""

from .files import atomic_write_text
from .paths import config_file, home, user_config_dir
from .process import ProcessError, query

__all__ = [
    # files
    "atomic_write_text",
    # paths
    "config_file",
    "home",
    "user_config_dir",
    # process
    "ProcessError",
    "query",
]
