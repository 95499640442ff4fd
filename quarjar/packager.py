#!/usr/bin/env python3
"""
packager.py (quarjar)

Render a Quarto document and package the result as a zip suitable for
upload as a Skilljar web package.

Layout, for ``lessons/lesson1.qmd`` with no output directory given:

    lessons/_lesson1/index.html   staging directory written by Quarto
    lessons/lesson1.zip           archive containing _lesson1/index.html

The staging directory is removed once the zip exists, and also when
rendering fails. It is kept only when rendering succeeded but the zip
step did not, so the rendered output can be inspected.

The zip step runs with the output directory as the working directory so
that entries inside the archive are relative. The previous working
directory is always restored.

Concurrent calls for the same document and output directory are not
supported; they share the staging directory and archive path.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import zipfile
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

from quarjar.errors import (
    RenderError,
    archive_exists_error,
    archive_failed_error,
    invalid_extension_error,
    source_not_found_error,
)

logger = logging.getLogger(__name__)

QMD_EXTENSION = ".qmd"
INDEX_FILE = "index.html"
STAGING_PREFIX = "_"

# Info-ZIP exit codes reported by archive_directory
ZIP_OK = 0
ZIP_NOTHING_TO_DO = 12
ZIP_CANNOT_WRITE = 15
ZIP_MISSING_FILE = 18


class PackageStage(Enum):
    """How far one packaging run got; decides what cleanup happens."""
    NOT_STARTED = "not_started"
    RENDERED = "rendered"
    ARCHIVED = "archived"


@contextmanager
def working_directory(path: Union[str, Path]) -> Iterator[Path]:
    """Temporarily change the process working directory."""
    previous = os.getcwd()
    os.chdir(path)
    try:
        yield Path(path)
    finally:
        os.chdir(previous)


# ============================================================================
# Render step (Quarto CLI)
# ============================================================================

def quarto_executable() -> Optional[str]:
    """Locate the quarto binary. QUARTO_PATH overrides the PATH lookup."""
    override = os.environ.get("QUARTO_PATH")
    if override:
        return override
    return shutil.which("quarto")


def render_document(
    source_path: Union[str, Path],
    entry_point: str,
    output_dir: Union[str, Path],
    quiet: bool = False,
) -> None:
    """
    Render ``source_path`` to HTML with ``quarto render``.

    The rendered entry point is written as ``output_dir/entry_point``.
    Quarto may create ``output_dir`` even when rendering fails.

    Raises:
        RenderError: If quarto is not installed or exits non-zero
    """
    quarto = quarto_executable()
    if not quarto:
        raise RenderError(
            "Quarto CLI not found",
            suggestion="Install Quarto from https://quarto.org/docs/get-started/ or set QUARTO_PATH.",
            context={"source": str(source_path)},
        )

    cmd = [
        quarto, "render", str(source_path),
        "--output", entry_point,
        "--output-dir", str(output_dir),
    ]
    if quiet:
        cmd.append("--quiet")

    logger.debug("[render] %s", " ".join(cmd))
    result = subprocess.run(
        cmd,
        stdout=subprocess.PIPE if quiet else None,
        stderr=subprocess.PIPE if quiet else None,
        text=True,
    )

    if result.returncode != 0:
        context = {"source": str(source_path), "exit_status": result.returncode}
        if result.stderr:
            context["stderr"] = "\n".join(result.stderr.strip().splitlines()[-10:])
        raise RenderError(
            f"quarto render failed for {source_path} (exit status {result.returncode})",
            suggestion="Run 'quarto render' on the document directly to see the full output.",
            context=context,
        )


# ============================================================================
# Archive step
# ============================================================================

def _iter_member_files(member: Path) -> Iterator[Path]:
    yield member
    if member.is_dir():
        for path in sorted(member.rglob("*")):
            yield path


def archive_directory(
    zip_filename: Union[str, Path],
    members: Sequence[Union[str, Path]],
    quiet: bool = False,
) -> int:
    """
    Zip ``members`` (recursively) into ``zip_filename``.

    Paths are taken relative to the current working directory and stored
    as given, so call this from the directory the entries should be
    relative to. An existing archive is replaced, never updated in place.

    Returns:
        0 on success, otherwise an Info-ZIP style exit status
        (12 nothing to do, 15 cannot write, 18 missing member)
    """
    member_paths = [Path(m) for m in members]
    if not member_paths:
        logger.error("[zip] Nothing to do for %s", zip_filename)
        return ZIP_NOTHING_TO_DO

    missing = [str(p) for p in member_paths if not p.exists()]
    if missing:
        logger.error("[zip] Name not matched: %s", ", ".join(missing))
        return ZIP_MISSING_FILE

    target = Path(zip_filename)
    partial = target.with_name(f".{target.name}.part")
    try:
        with zipfile.ZipFile(
            partial, "w", zipfile.ZIP_DEFLATED, compresslevel=9, strict_timestamps=False
        ) as zf:
            for member in member_paths:
                for path in _iter_member_files(member):
                    arcname = path.as_posix()
                    zf.write(path, arcname)
                    if not quiet:
                        logger.info("  adding: %s%s", arcname, "/" if path.is_dir() else "")
        os.replace(partial, target)
    except OSError as e:
        logger.error("[zip] Could not write %s: %s", target, e)
        return ZIP_CANNOT_WRITE
    finally:
        if partial.exists():
            partial.unlink()

    return ZIP_OK


# ============================================================================
# Packaging pipeline
# ============================================================================

def _remove_staging(staging_dir: Path) -> None:
    if staging_dir.exists():
        shutil.rmtree(staging_dir)
        logger.debug("[package] Removed staging directory %s", staging_dir)


def generate_zip_package(
    qmd_path: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
    quiet: bool = False,
    overwrite: bool = True,
) -> Path:
    """
    Render a .qmd document and zip the rendered output.

    Args:
        qmd_path: Quarto source document
        output_dir: Where the staging directory and zip are created.
            Defaults to the document's directory; created if missing.
        quiet: Suppress render and zip progress output
        overwrite: Replace an existing zip. When False and the zip exists,
            fail before rendering.

    Returns:
        Absolute path of the zip file (``<output_dir>/<name>.zip``)

    Raises:
        ValidationError: Wrong extension or missing source file
        ConflictError: Zip exists and overwrite is False
        RenderError: Propagated unchanged from the render step
        ArchiveError: The zip step returned a non-zero status
    """
    source = Path(qmd_path).expanduser()
    if source.suffix != QMD_EXTENSION:
        raise invalid_extension_error(source, QMD_EXTENSION)
    if not source.is_file():
        raise source_not_found_error(source)
    source = source.resolve()

    if output_dir is None:
        out_dir = source.parent
    else:
        out_dir = Path(output_dir).expanduser()
        out_dir.mkdir(parents=True, exist_ok=True)
        out_dir = out_dir.resolve()

    base_name = source.stem
    staging_dir = out_dir / f"{STAGING_PREFIX}{base_name}"
    archive_path = out_dir / f"{base_name}.zip"

    if archive_path.exists() and not overwrite:
        raise archive_exists_error(archive_path)

    # Leftovers from an earlier failed zip step would end up in the archive
    _remove_staging(staging_dir)

    stage = PackageStage.NOT_STARTED
    try:
        if not quiet:
            logger.info("[package] Rendering %s", source.name, extra={"icon": "RENDER"})
        render_document(source, INDEX_FILE, staging_dir, quiet=quiet)
        stage = PackageStage.RENDERED

        if not quiet:
            logger.info("[package] Zipping %s", staging_dir.name, extra={"icon": "PACKAGE"})
        with working_directory(out_dir):
            status = archive_directory(archive_path.name, [staging_dir.name], quiet=quiet)

        if status != ZIP_OK:
            raise archive_failed_error(status, archive_path, staging_dir)
        stage = PackageStage.ARCHIVED
    finally:
        if stage is PackageStage.RENDERED:
            logger.warning("[package] Kept staging directory for inspection: %s", staging_dir)
        else:
            _remove_staging(staging_dir)

    if not quiet:
        logger.info("[package] Created zip file: %s", archive_path, extra={"icon": "SUCCESS"})
    return archive_path
