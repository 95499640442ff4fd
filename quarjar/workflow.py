#!/usr/bin/env python3
"""
workflow.py (quarjar)

Install the GitHub Actions workflow that publishes a Quarto document to
Skilljar:

1. Render the .qmd and package it with ``quarjar package``
2. Publish the zip to GitHub Pages under ``skilljar-zips/``
3. Create a Skilljar web package from the Pages URL and wait for it
4. Create a WEB_PACKAGE lesson in the course

The workflow file is written to
``.github/workflows/publish-quarto-to-skilljar.yml`` in the project.
"""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import List, Optional, Union

from quarjar.errors import ConfigurationError, workflow_exists_error
from quarjar.security_utils import is_safe_path

logger = logging.getLogger(__name__)

WORKFLOWS_DIR = Path(".github") / "workflows"
WORKFLOW_FILENAME = "publish-quarto-to-skilljar.yml"
SETUP_GUIDE_URL = "https://github.com/posit-dev/quarjar/blob/main/GITHUB_ACTION_SETUP.md"

NEXT_STEPS = [
    "Enable GitHub Pages in repository settings (Settings -> Pages -> Deploy from gh-pages branch)",
    "Add the SKILLJAR_API_KEY secret (Settings -> Secrets and variables -> Actions)",
    "Set workflow permissions to 'Read and write' (Settings -> Actions -> General)",
    "Commit and push the workflow file to your repository",
    "Trigger the workflow from the Actions tab",
]


WORKFLOW_TEMPLATE = textwrap.dedent(
    """\
    name: Publish Quarto to Skilljar

    on:
      workflow_dispatch:
        inputs:
          qmd-file:
            description: "Path to the Quarto (.qmd) file"
            required: true
          course-id:
            description: "Skilljar course ID"
            required: true
          lesson-title:
            description: "Title for the new lesson"
            required: true
          package-title:
            description: "Title for the web package (defaults to the lesson title)"
            required: false
            default: ""

    permissions:
      contents: write

    jobs:
      publish:
        runs-on: ubuntu-latest
        env:
          SKILLJAR_API_KEY: ${{ secrets.SKILLJAR_API_KEY }}
        steps:
          - name: Check out repository
            uses: actions/checkout@v4

          - name: Set up Quarto
            uses: quarto-dev/quarto-actions/setup@v2

          - name: Set up Python
            uses: actions/setup-python@v5
            with:
              python-version: "3.12"

          - name: Install quarjar
            run: pip install quarjar

          - name: Render and package
            id: package
            run: |
              QMD="${{ inputs.qmd-file }}"
              NAME="$(basename "${QMD%.qmd}")"
              STAMP="$(date -u +%Y%m%d%H%M%S)"
              quarjar package "$QMD" --output-dir _skilljar_build --quiet
              mkdir -p _site/skilljar-zips
              cp "_skilljar_build/${NAME}.zip" "_site/skilljar-zips/${NAME}-${STAMP}.zip"
              echo "zip-name=${NAME}-${STAMP}.zip" >> "$GITHUB_OUTPUT"

          - name: Publish zip to GitHub Pages
            uses: peaceiris/actions-gh-pages@v4
            with:
              github_token: ${{ secrets.GITHUB_TOKEN }}
              publish_dir: ./_site
              keep_files: true

          - name: Wait for GitHub Pages
            run: |
              URL="https://${{ github.repository_owner }}.github.io/${{ github.event.repository.name }}/skilljar-zips/${{ steps.package.outputs.zip-name }}"
              for i in $(seq 1 30); do
                if curl --silent --fail --head "$URL" > /dev/null; then
                  echo "Zip is live at $URL"
                  exit 0
                fi
                sleep 10
              done
              echo "Zip did not become available at $URL" >&2
              exit 1

          - name: Create Skilljar web package
            id: web-package
            run: |
              URL="https://${{ github.repository_owner }}.github.io/${{ github.event.repository.name }}/skilljar-zips/${{ steps.package.outputs.zip-name }}"
              TITLE="${{ inputs.package-title }}"
              if [ -z "$TITLE" ]; then TITLE="${{ inputs.lesson-title }}"; fi
              quarjar web-package create "$URL" --title "$TITLE" --wait > web_package.json
              echo "id=$(python -c 'import json; print(json.load(open("web_package.json"))["id"])')" >> "$GITHUB_OUTPUT"

          - name: Create Skilljar lesson
            run: |
              quarjar lesson create-web-package \\
                --course-id "${{ inputs.course-id }}" \\
                --title "${{ inputs.lesson-title }}" \\
                --web-package-id "${{ steps.web-package.outputs.id }}"
    """
)


def _looks_like_quarjar_source(project_dir: Path) -> bool:
    return (project_dir / "quarjar" / "workflow.py").exists() and (project_dir / "setup.py").exists()


def use_skilljar_workflow(
    project_dir: Optional[Union[str, Path]] = None,
    overwrite: bool = False,
) -> Path:
    """
    Add the Skilljar publishing workflow to a Git repository.

    Args:
        project_dir: Repository root (defaults to cwd)
        overwrite: Replace an existing workflow file

    Returns:
        Path of the written workflow file

    Raises:
        ConfigurationError: Run from the quarjar source tree, or not a Git repository
        ConflictError: Workflow exists and overwrite is False
    """
    root = Path(project_dir) if project_dir else Path.cwd()
    root = root.resolve()

    if _looks_like_quarjar_source(root):
        raise ConfigurationError(
            "This function should not be run from the quarjar package directory.",
            suggestion="Navigate to your project directory first, then run it again.",
            context={"directory": str(root)},
        )

    if not (root / ".git").is_dir():
        raise ConfigurationError(
            "This doesn't appear to be a Git repository.",
            suggestion="Initialize a Git repository first with: git init",
            context={"directory": str(root)},
        )

    workflows_dir = root / WORKFLOWS_DIR
    target_path = workflows_dir / WORKFLOW_FILENAME
    if not is_safe_path(root, target_path):
        raise ConfigurationError(
            f"Refusing to write outside the project: {target_path}",
            context={"directory": str(root)},
        )

    if target_path.exists() and not overwrite:
        raise workflow_exists_error(target_path)

    if not workflows_dir.exists():
        workflows_dir.mkdir(parents=True)
        logger.info("[workflow] Created %s/ directory", WORKFLOWS_DIR.as_posix(), extra={"icon": "WORKFLOW"})

    target_path.write_text(WORKFLOW_TEMPLATE, encoding="utf-8")
    logger.info("[workflow] Added GitHub Actions workflow: %s", target_path, extra={"icon": "SUCCESS"})
    return target_path


def next_steps() -> List[str]:
    """Setup steps to show after installing the workflow."""
    return list(NEXT_STEPS)
