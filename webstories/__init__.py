"""Stories backend: multi-slide stories with likes, bookmarks and downloads."""

__version__ = "0.1.0"
