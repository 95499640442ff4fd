#!/usr/bin/env python3
"""
web_packages.py (quarjar)

Create and manage Skilljar web packages.

A web package is created from a publicly reachable zip URL; Skilljar
downloads and re-hosts it, then processes it asynchronously. Creating a
lesson for a package that has not reached the READY state can fail, so
``wait_for_web_package`` polls until processing finishes.
"""

import logging
import time
from typing import Any, Callable, Dict

from quarjar.errors import SkilljarAPIError
from quarjar.security_utils import require_value, validate_url
from quarjar.skilljar_client import SkilljarClient

logger = logging.getLogger(__name__)

READY_STATE = "READY"
FAILED_STATES = {"FAILED", "ERROR"}


def create_web_package(
    client: SkilljarClient,
    content_url: str,
    title: str,
    redirect_on_completion: bool = True,
    sync_on_completion: bool = False,
) -> Dict[str, Any]:
    """
    Create a web package from a remotely hosted zip file.

    Args:
        content_url: Public http(s) URL of the zip
        title: Package title (Skilljar may replace it after processing)
    """
    content_url = validate_url(content_url, field="content_url")
    title = require_value(title, "title")

    body = {
        "content_url": content_url,
        "web_package": {
            "title": title,
            "redirect_on_completion": bool(redirect_on_completion),
            "sync_on_completion": bool(sync_on_completion),
        },
    }
    package = client.post("v1/web-packages", operation=f"create web package '{title}'", json=body)
    logger.info("[web-package] Web package created with ID: %s", package.get("id"), extra={"icon": "SUCCESS"})
    return package


def get_web_package(client: SkilljarClient, web_package_id) -> Dict[str, Any]:
    web_package_id = require_value(web_package_id, "web_package_id")
    return client.get("v1/web-packages", web_package_id, operation="retrieve web package")


def list_web_packages(client: SkilljarClient, page: int = 1, page_size: int = 20) -> Dict[str, Any]:
    return client.get(
        "v1/web-packages",
        operation="list web packages",
        params={"page": int(page), "page_size": int(page_size)},
    )


def delete_web_package(client: SkilljarClient, web_package_id) -> None:
    """Delete a web package. Only allowed while no lesson uses it."""
    web_package_id = require_value(web_package_id, "web_package_id")
    client.delete("v1/web-packages", web_package_id, operation="delete web package")
    logger.info("[web-package] Web package %s deleted", web_package_id, extra={"icon": "SUCCESS"})


def wait_for_web_package(
    client: SkilljarClient,
    web_package_id,
    timeout: float = 300.0,
    interval: float = 5.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """
    Poll a web package until its state is READY.

    Raises:
        SkilljarAPIError: If processing fails or does not finish in time
    """
    deadline = time.monotonic() + timeout
    while True:
        package = get_web_package(client, web_package_id)
        state = (package.get("state") or "").upper()

        if state == READY_STATE:
            logger.info("[web-package] Web package %s is ready", web_package_id, extra={"icon": "SUCCESS"})
            return package

        if state in FAILED_STATES:
            raise SkilljarAPIError(
                f"Web package {web_package_id} failed processing (state: {state})",
                operation="process web package",
                context={"web_package_id": web_package_id, "state": state},
            )

        if time.monotonic() >= deadline:
            raise SkilljarAPIError(
                f"Timed out after {timeout:.0f}s waiting for web package {web_package_id}",
                operation="process web package",
                context={"web_package_id": web_package_id, "last_state": state or "unknown"},
                suggestion="Check the package later with: quarjar web-package get <id>",
            )

        logger.info("[web-package] State is %s; checking again in %.0fs", state or "unknown", interval)
        sleep(interval)
