"""Centralized symbols for consistent log output."""


class LogSymbols:
    """Unicode symbols for log messages."""
    
    SUCCESS = "✓"
    ERROR = "✗"
    ERROR_BOLD = "❌"     # U+274C - Cross mark (bold error for user-facing messages)
    WARNING = "⚠️"
    INFO = "ℹ"
    
    # List and formatting
    BULLET = "•"         # U+2022 - Bullet point for lists
    TRASH = "🗑"         # U+1F5D1 - Trash/delete indicator
