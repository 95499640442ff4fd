#!/usr/bin/env python3
"""
icons.py - Centralized icon/emoji definitions for quarjar output

Usage:
    from quarjar.icons import icons
    print(f"{icons.SUCCESS} Package created!")

Or import individual icons:
    from quarjar.icons import SUCCESS, WARNING, ERROR
    print(f"{SUCCESS} Done!")

All unicode characters are defined here once. Import from this module
instead of typing emoji in other files.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Icons:
    """
    Centralized icon definitions.

    Categories:
    - Status: SUCCESS, ERROR, WARNING, INFO, SKIP, DEBUG
    - Actions: UPLOAD, DELETE, CREATE, RENDER
    - Content: LESSON, CONTENT, ASSET, WEB_PACKAGE, COURSE
    - Progress: WORKING, WAITING
    - Misc: FOLDER, FILE, LINK, LIST, SWEEP, PACKAGE, WORKFLOW
    """

    # Status
    SUCCESS: str = "✅"
    ERROR: str = "❌"
    WARNING: str = "⚠️"
    INFO: str = "ℹ️"
    SKIP: str = "⏭️"
    DEBUG: str = "🔍"

    # Actions
    UPLOAD: str = "⬆️"
    DELETE: str = "🗑️"
    CREATE: str = "➕"
    RENDER: str = "🖨️"

    # Skilljar resources
    LESSON: str = "📖"
    CONTENT: str = "📄"
    ASSET: str = "🖼"
    WEB_PACKAGE: str = "🌐"
    COURSE: str = "📚"

    # Progress
    WORKING: str = "⏳"
    WAITING: str = "🕐"

    # Misc
    FOLDER: str = "📁"
    FILE: str = "📄"
    LINK: str = "🔗"
    LIST: str = "📋"
    SWEEP: str = "🧹"
    PACKAGE: str = "📦"
    WORKFLOW: str = "⚙️"


class AsciiIcons:
    """ASCII-only fallback icons for limited terminals."""

    SUCCESS = "[OK]"
    ERROR = "[X]"
    WARNING = "[!]"
    INFO = "[i]"
    SKIP = "[ ]"
    DEBUG = "[?]"
    UPLOAD = "[^]"
    DELETE = "[-]"
    CREATE = "[+]"
    RENDER = "[R]"
    LESSON = "[L]"
    CONTENT = "[C]"
    ASSET = "[A]"
    WEB_PACKAGE = "[W]"
    COURSE = "[K]"
    WORKING = "[.]"
    WAITING = "[:]"
    FOLDER = "[D]"
    FILE = "[F]"
    LINK = "[>]"
    LIST = "[=]"
    SWEEP = "[-]"
    PACKAGE = "[Z]"
    WORKFLOW = "[*]"


# Global singleton instance
icons = Icons()

SUCCESS = icons.SUCCESS
ERROR = icons.ERROR
WARNING = icons.WARNING
INFO = icons.INFO
SKIP = icons.SKIP
UPLOAD = icons.UPLOAD
DELETE = icons.DELETE
CREATE = icons.CREATE
RENDER = icons.RENDER
LESSON = icons.LESSON
ASSET = icons.ASSET
WEB_PACKAGE = icons.WEB_PACKAGE
WORKING = icons.WORKING
WAITING = icons.WAITING
PACKAGE = icons.PACKAGE
WORKFLOW = icons.WORKFLOW


def use_ascii_icons():
    """
    Switch to ASCII-only icons globally.

    The log formatter looks icons up on every record, so this also
    affects logging output from then on.
    """
    global icons, SUCCESS, ERROR, WARNING, INFO, SKIP
    global UPLOAD, DELETE, CREATE, RENDER, LESSON, ASSET, WEB_PACKAGE
    global WORKING, WAITING, PACKAGE, WORKFLOW

    ascii_icons = AsciiIcons()
    icons = ascii_icons

    SUCCESS = ascii_icons.SUCCESS
    ERROR = ascii_icons.ERROR
    WARNING = ascii_icons.WARNING
    INFO = ascii_icons.INFO
    SKIP = ascii_icons.SKIP
    UPLOAD = ascii_icons.UPLOAD
    DELETE = ascii_icons.DELETE
    CREATE = ascii_icons.CREATE
    RENDER = ascii_icons.RENDER
    LESSON = ascii_icons.LESSON
    ASSET = ascii_icons.ASSET
    WEB_PACKAGE = ascii_icons.WEB_PACKAGE
    WORKING = ascii_icons.WORKING
    WAITING = ascii_icons.WAITING
    PACKAGE = ascii_icons.PACKAGE
    WORKFLOW = ascii_icons.WORKFLOW


def lesson_type_icon(lesson_type: str) -> str:
    """Return icon for a Skilljar lesson type string."""
    type_map = {
        "MODULAR": icons.LESSON,
        "HTML": icons.CONTENT,
        "ASSET": icons.ASSET,
        "WEB_PACKAGE": icons.WEB_PACKAGE,
        "SECTION": icons.FOLDER,
    }
    return type_map.get((lesson_type or "").upper(), icons.FILE)


def log(icon: str, message: str, prefix: str = "") -> str:
    """
    Format a message with icon.

    Example:
        click.echo(log(SUCCESS, "Lesson created", prefix="lesson"))
        # -> "[lesson] ✅ Lesson created"
    """
    if prefix:
        return f"[{prefix}] {icon} {message}"
    return f"{icon} {message}"
