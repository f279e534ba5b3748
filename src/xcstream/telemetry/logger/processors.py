# src/xcstream/telemetry/logger/processors.py

"""
Custom structlog processors used by the xcstream logging pipeline.
"""

import logging

from structlog.typing import EventDict, WrappedLogger

LOG_EMOJIS = {
    logging.DEBUG: "🐛",
    logging.INFO: "ℹ️",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "💥",
}

# Keyed by the ``emoji_key`` a caller may bind, e.g. log.info("...", emoji_key="suite").
CONTEXT_EMOJIS = {
    "test": "🧪",
    "suite": "📦",
    "issue": "🚫",
    "config": "📄",
    "parse": "🔎",
    "success": "🎉",
}

# Keys that steer processing only and must not reach the renderer.
EXTRA_KEYS = ("emoji_key",)


def add_emoji_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Prefix the event message with an emoji chosen by context or level."""
    emoji = CONTEXT_EMOJIS.get(event_dict.get("emoji_key", ""))
    if emoji is None:
        level = logging.getLevelName(method_name.upper())
        emoji = LOG_EMOJIS.get(level, "➡️") if isinstance(level, int) else "➡️"
    event = event_dict.get("event")
    if isinstance(event, str):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Drop processing-only keys before rendering."""
    for key in EXTRA_KEYS:
        event_dict.pop(key, None)
    return event_dict

# 🔼⚙️
