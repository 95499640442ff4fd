"""
courses.py - Course lookups and lesson ordering
"""

import logging
from typing import Any, Dict, Optional

from quarjar.security_utils import require_value
from quarjar.skilljar_client import SkilljarClient

logger = logging.getLogger(__name__)


def get_course(client: SkilljarClient, course_id) -> Dict[str, Any]:
    """Retrieve details for one course."""
    course_id = require_value(course_id, "course_id")
    return client.get("v1/courses", course_id, operation="retrieve course")


def list_lessons(client: SkilljarClient, course_id, page: Optional[int] = None) -> Dict[str, Any]:
    """List the lessons of a course (paginated response with ``results``)."""
    course_id = require_value(course_id, "course_id")
    params = {"course_id": course_id}
    if page is not None:
        params["page"] = int(page)
    return client.get("v1/lessons", operation="list lessons", params=params)


def get_next_lesson_order(client: SkilljarClient, course_id) -> int:
    """
    Find the next free ``order`` value for a new lesson in a course.

    Returns 0 for a course without lessons, otherwise one past the highest
    existing order. Every page of lessons is read; lessons without an
    order are ignored.
    """
    orders = []
    page = None
    while True:
        lessons = list_lessons(client, course_id, page=page) or {}
        orders.extend(
            lesson["order"]
            for lesson in lessons.get("results", [])
            if lesson.get("order") is not None
        )
        if not lessons.get("next"):
            break
        page = (page or 1) + 1
        logger.debug("[course] Reading lesson page %d", page)

    if not orders:
        return 0
    return int(max(orders)) + 1
