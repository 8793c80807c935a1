"""User-friendly error message templates."""

import requests

from .symbols import LogSymbols


def get_user_friendly_error(error_type, error_details=""):
    """Convert error type to user-friendly message with actionable steps."""
    messages = {
        'network_timeout': (
            f"{LogSymbols.ERROR_BOLD} Connection timeout\n\n"
            "The download took too long to respond.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Check your internet connection\n"
            f"{LogSymbols.BULLET} Try again later (Thunderstore might be busy)\n"
            f"{LogSymbols.BULLET} Check if your firewall is blocking the connection"
        ),

        'network_404': (
            f"{LogSymbols.ERROR_BOLD} Package not found (404)\n\n"
            "The download link is broken or the package version was removed.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Refresh the package index\n"
            f"{LogSymbols.BULLET} Install the latest version instead"
        ),

        'disk_space': (
            f"{LogSymbols.ERROR_BOLD} Not enough disk space\n\n"
            "Your drive doesn't have enough free space for the mod.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Free up some space\n"
            f"{LogSymbols.BULLET} Remove mods you no longer use"
        ),

        'permission_denied': (
            f"{LogSymbols.ERROR_BOLD} Permission denied\n\n"
            "Can't write to the Titanfall 2 folder.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Check folder permissions\n"
            f"{LogSymbols.BULLET} Close Titanfall 2 if it's running"
        ),

        'corrupted_archive': (
            f"{LogSymbols.ERROR_BOLD} Corrupted download\n\n"
            "The downloaded file is damaged or incomplete.\n\n"
            "Try:\n"
            f"{LogSymbols.BULLET} Download again\n"
            f"{LogSymbols.BULLET} Check your internet connection stability"
        ),

        'dependency_missing': (
            LogSymbols.WARNING + " Missing dependencies\n\n"
            "This mod requires packages that are not in the package index.\n\n"
            "Check the log for the dependency that could not be resolved."
        ),
    }

    default_message = (
        f"{LogSymbols.ERROR_BOLD} An error occurred\n\n"
        f"Technical details: {error_details}\n\n"
        f"Try:\n"
        f"{LogSymbols.BULLET} Check the log for more information\n"
        f"{LogSymbols.BULLET} Report this issue if it persists"
    )

    return messages.get(error_type, default_message)


def suggest_fix_for_error(exception):
    from ..core.errors import DepError

    # Network errors
    if isinstance(exception, requests.exceptions.Timeout):
        return 'network_timeout'
    elif isinstance(exception, requests.exceptions.ConnectionError):
        return 'network_timeout'
    elif isinstance(exception, requests.exceptions.HTTPError):
        if exception.response is not None and exception.response.status_code == 404:
            return 'network_404'

    # Dependency errors
    elif isinstance(exception, DepError):
        return 'dependency_missing'

    # File system errors
    elif isinstance(exception, PermissionError):
        return 'permission_denied'
    elif isinstance(exception, OSError):
        if 'No space left' in str(exception):
            return 'disk_space'
        return 'permission_denied'

    # Archive errors
    elif 'zipfile' in str(type(exception)).lower() or 'tarfile' in str(type(exception)).lower():
        return 'corrupted_archive'

    return None  # Use default message
