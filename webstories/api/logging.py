"""Structured logging infrastructure for the API layer.

Provides JSON-formatted logging for production and human-readable
logging for development, plus a StoryLogger helper for story events.
"""

import json
import logging
import sys
from datetime import datetime, timezone

# Extra record attributes copied into JSON log lines when present
_EXTRA_FIELDS = ("story_id", "user_id", "action", "liked", "bookmarked", "error_type")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(json_format: bool = True, level: int | str = logging.INFO) -> None:
    """Configure structured logging for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root_logger.addHandler(handler)


class StoryLogger:
    """Logger for story events with structured fields."""

    def __init__(self):
        self.logger = logging.getLogger("stories")

    def story_created(self, story_id: str, user_id: str) -> None:
        self.logger.info(
            "Story created",
            extra={"story_id": story_id, "user_id": user_id, "action": "create"},
        )

    def story_updated(self, story_id: str, user_id: str, fields: list[str]) -> None:
        self.logger.info(
            f"Story updated: {', '.join(fields) or 'no fields'}",
            extra={"story_id": story_id, "user_id": user_id, "action": "update"},
        )

    def edit_forbidden(self, story_id: str, user_id: str) -> None:
        self.logger.warning(
            "Edit rejected for non-author",
            extra={"story_id": story_id, "user_id": user_id, "action": "update"},
        )

    def like_toggled(self, story_id: str, user_id: str, liked: bool) -> None:
        self.logger.info(
            "Like toggled",
            extra={"story_id": story_id, "user_id": user_id, "action": "like", "liked": liked},
        )

    def bookmark_toggled(self, story_id: str, user_id: str, bookmarked: bool) -> None:
        self.logger.info(
            "Bookmark toggled",
            extra={
                "story_id": story_id,
                "user_id": user_id,
                "action": "bookmark",
                "bookmarked": bookmarked,
            },
        )

    def request_failed(self, path: str, error: Exception) -> None:
        self.logger.error(
            f"Unhandled error on {path}: {error}",
            extra={"error_type": type(error).__name__},
            exc_info=error,
        )


# Global story logger instance
story_logger = StoryLogger()
