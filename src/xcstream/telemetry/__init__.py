# src/xcstream/telemetry/__init__.py

"""
Logging setup and logger type exports for xcstream.
"""

from .logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️
