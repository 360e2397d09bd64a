"""Framework-free logic for chat-bot plugins: parsing, SQLite stores, draws and reply text."""

__version__ = "0.1.0"