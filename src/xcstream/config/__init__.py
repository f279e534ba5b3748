#
# config/__init__.py
#
"""
Configuration handling sub-package for xcstream.

Exports the loading function and core configuration models.
"""

# Export the main loading function from the loader module
from .loader import load_config

# Export the core configuration models from the models module
from .models import (
    GlobalConfig,
    ParserConfig,
    XcstreamConfig,
)

__all__ = [
    "GlobalConfig",
    "ParserConfig",
    "XcstreamConfig",
    "load_config",
]

# 🔼⚙️
