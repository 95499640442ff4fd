#!/usr/bin/env python3
"""
lessons.py (quarjar)

Create and inspect Skilljar lessons.

A MODULAR lesson holds any number of content items (see publish.py);
a WEB_PACKAGE lesson points at a processed web package (see
web_packages.py).
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from quarjar.courses import get_next_lesson_order
from quarjar.errors import ValidationError
from quarjar.publish import publish_html_content
from quarjar.security_utils import require_value
from quarjar.skilljar_client import SkilljarClient

logger = logging.getLogger(__name__)

LESSON_TYPES = (
    "ASSET",
    "HTML",
    "WEB_PACKAGE",
    "QUIZ",
    "VILT",
    "MODULAR",
    "SECTION",
)


def get_lesson(client: SkilljarClient, lesson_id) -> Dict[str, Any]:
    lesson_id = require_value(lesson_id, "lesson_id")
    return client.get("v1/lessons", lesson_id, operation="retrieve lesson")


def list_content_items(client: SkilljarClient, lesson_id) -> Dict[str, Any]:
    lesson_id = require_value(lesson_id, "lesson_id")
    return client.get("v1/lessons", lesson_id, "content-items", operation="list content items")


def _resolve_order(client: SkilljarClient, course_id: str, order: Optional[int]) -> int:
    if order is None:
        order = get_next_lesson_order(client, course_id)
        logger.info("[lesson] Using auto-detected order: %d", order)
    return int(order)


def create_lesson(
    client: SkilljarClient,
    course_id,
    title: str,
    type: str = "MODULAR",
    order: int = 0,
    description_html: str = "",
    optional: bool = False,
    display_fullscreen: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Create a lesson in a course.

    ``display_fullscreen`` is left out of the request when None so that
    Skilljar applies its own default.
    """
    course_id = require_value(course_id, "course_id")
    title = require_value(title, "title")

    if type not in LESSON_TYPES:
        raise ValidationError(
            f"Invalid lesson type '{type}'. Must be one of: {', '.join(LESSON_TYPES)}"
        )

    logger.info("[lesson] Creating %s lesson '%s' (order: %d)...", type, title, int(order))

    body = {
        "course_id": course_id,
        "title": title,
        "type": type,
        "order": int(order),
        "description_html": description_html,
        "optional": bool(optional),
    }
    if display_fullscreen is not None:
        body["display_fullscreen"] = bool(display_fullscreen)

    lesson = client.post("v1/lessons", operation=f"create lesson '{title}'", json=body)
    logger.info("[lesson] Lesson created with ID: %s", lesson.get("id"), extra={"icon": "SUCCESS"})
    return lesson


def create_lesson_with_content(
    client: SkilljarClient,
    course_id,
    lesson_title: str,
    html_path: Union[str, Path],
    content_title: str,
    lesson_order: Optional[int] = None,
    content_order: int = 0,
    description_html: str = "",
    display_fullscreen: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Create a MODULAR lesson and add one HTML content item to it.

    This is the usual way to publish a single rendered Quarto page.

    Returns:
        {"lesson": <lesson>, "content_item": <content item>}
    """
    course_id = require_value(course_id, "course_id")
    lesson_order = _resolve_order(client, course_id, lesson_order)

    lesson = create_lesson(
        client,
        course_id=course_id,
        title=lesson_title,
        type="MODULAR",
        order=lesson_order,
        description_html=description_html,
        display_fullscreen=display_fullscreen,
    )

    content_item = publish_html_content(
        client,
        lesson_id=lesson["id"],
        html_path=html_path,
        title=content_title,
        order=content_order,
    )

    logger.info(
        "[lesson] Successfully created lesson '%s' with content '%s'",
        lesson.get("title"), content_item.get("header"),
        extra={"icon": "SUCCESS"},
    )
    return {"lesson": lesson, "content_item": content_item}


def create_lesson_with_web_package(
    client: SkilljarClient,
    course_id,
    lesson_title: str,
    web_package_id,
    description: Optional[str] = None,
    display_fullscreen: Optional[bool] = None,
    order: Optional[int] = None,
) -> Dict[str, Any]:
    """Create a WEB_PACKAGE lesson that shows an existing web package."""
    course_id = require_value(course_id, "course_id")
    lesson_title = require_value(lesson_title, "lesson_title")
    web_package_id = require_value(web_package_id, "web_package_id")

    order = _resolve_order(client, course_id, order)

    body = {
        "course_id": course_id,
        "title": lesson_title,
        "type": "WEB_PACKAGE",
        "content_web_package_id": web_package_id,
        "order": order,
    }
    if description is not None:
        body["description_html"] = description
    if display_fullscreen is not None:
        body["display_fullscreen"] = bool(display_fullscreen)

    lesson = client.post("v1/lessons", operation=f"create lesson '{lesson_title}'", json=body)
    logger.info("[lesson] Lesson created with ID: %s", lesson.get("id"), extra={"icon": "SUCCESS"})
    return lesson
