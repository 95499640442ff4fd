#!/usr/bin/env python3
"""
publish.py (quarjar)

Publish a rendered HTML file as a content item inside an existing
MODULAR lesson.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

from quarjar.errors import ValidationError
from quarjar.security_utils import require_value
from quarjar.skilljar_client import SkilljarClient

logger = logging.getLogger(__name__)


def read_html(html_path: Union[str, Path]) -> str:
    """Read an HTML file, failing with ValidationError if it is missing."""
    path = Path(html_path)
    if not path.is_file():
        raise ValidationError(f"HTML file not found: {html_path}", context={"file": str(path)})
    return path.read_text(encoding="utf-8")


def publish_html_content(
    client: SkilljarClient,
    lesson_id,
    html_path: Union[str, Path],
    title: str,
    order: int = 0,
) -> Dict[str, Any]:
    """
    Create an HTML content item in a lesson.

    Args:
        client: Configured SkilljarClient
        lesson_id: ID of a MODULAR lesson
        html_path: Rendered HTML file to embed
        title: Header shown for the content item
        order: Position of the item within the lesson

    Returns:
        The created content item as returned by the API
    """
    lesson_id = require_value(lesson_id, "lesson_id")
    html_content = read_html(html_path)
    title = require_value(title, "title")

    logger.info("[publish] Read %d characters from %s", len(html_content), html_path)
    logger.info("[publish] Creating content item in lesson %s...", lesson_id)

    item = client.post(
        "v1/lessons", lesson_id, "content-items",
        operation=f"create content item '{title}'",
        json={
            "type": "HTML",
            "content_html": html_content,
            "header": title,
            "order": int(order),
        },
    )
    logger.info("[publish] Content item created with ID: %s", item.get("id"), extra={"icon": "SUCCESS"})
    return item
