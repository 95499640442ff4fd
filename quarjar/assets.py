#!/usr/bin/env python3
"""
assets.py (quarjar)

Upload and manage Skilljar assets (images, PDFs, zip files, ...).

For lesson HTML use publish.publish_html_content instead; assets are for
supporting files and non-HTML content.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

from quarjar.errors import SkilljarAPIError, ValidationError
from quarjar.security_utils import require_value
from quarjar.skilljar_client import SkilljarClient

logger = logging.getLogger(__name__)


def upload_asset(client: SkilljarClient, file_path: Union[str, Path]) -> str:
    """
    Upload a file as an asset and return its asset ID.

    The file name is used as the asset name. Metadata is sent as nested
    form fields (``asset[name]``) alongside the multipart file.
    """
    path = Path(file_path)
    if not path.is_file():
        raise ValidationError(f"File not found: {file_path}", context={"file": str(path)})

    file_name = path.name
    logger.info("[asset] Uploading %s...", file_name)

    with path.open("rb") as fh:
        body = client.post(
            "v1/assets",
            operation=f"upload asset '{file_name}'",
            files={"file": (file_name, fh)},
            data={"asset[name]": file_name},
        )

    asset_id = (body or {}).get("id")
    if not asset_id:
        raise SkilljarAPIError(
            "No asset ID returned from Skilljar API",
            operation=f"upload asset '{file_name}'",
            context={"response": body},
        )

    logger.info("[asset] Asset uploaded with ID: %s", asset_id, extra={"icon": "SUCCESS"})
    return str(asset_id)


def list_assets(client: SkilljarClient, page: int = 1, page_size: int = 20) -> Dict[str, Any]:
    """
    List assets in the organization.

    Returns the paginated response: ``count``, ``next``, ``previous`` and
    ``results``.
    """
    return client.get(
        "v1/assets",
        operation="list assets",
        params={"page": int(page), "page_size": int(page_size)},
    )


def get_asset(client: SkilljarClient, asset_id) -> Dict[str, Any]:
    """Asset details, including a signed ``download_url`` valid for an hour."""
    asset_id = require_value(asset_id, "asset_id")
    return client.get("v1/assets", asset_id, operation="retrieve asset details")


def delete_asset(client: SkilljarClient, asset_id) -> None:
    """Delete an asset. Skilljar refuses while the asset is still in use."""
    asset_id = require_value(asset_id, "asset_id")
    client.delete("v1/assets", asset_id, operation="delete asset")
    logger.info("[asset] Asset %s deleted", asset_id, extra={"icon": "SUCCESS"})
