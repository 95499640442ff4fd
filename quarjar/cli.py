# cli.py - Command line interface for quarjar
"""
quarjar CLI - Publish Quarto content to Skilljar

COMMANDS:
    Packaging:
        quarjar package FILE.qmd [--output-dir DIR]    Render and zip a document

    Publishing:
        quarjar publish --lesson-id ID --html FILE     Add HTML to a MODULAR lesson
        quarjar lesson create-with-content ...         New lesson + HTML content
        quarjar lesson create-web-package ...          New WEB_PACKAGE lesson

    Resources:
        quarjar course get|lessons|next-order ID
        quarjar lesson get|items|create ...
        quarjar asset upload|list|get|delete ...
        quarjar web-package create|get|list|delete ...

    Project:
        quarjar use-workflow [--overwrite]             Install GitHub Actions workflow
        quarjar init [--course-id ID]                  Write quarjar.yaml
        quarjar info                                   Show configuration
        quarjar version                                Show version

EXAMPLES:
    # Package a lesson next to its source
    quarjar package lessons/lesson1.qmd

    # Create a lesson with rendered HTML
    quarjar lesson create-with-content --course-id abc123 \\
        --title "Intro" --html _site/intro.html --content-title "Content"

    # Host a zip somewhere public, then
    quarjar web-package create https://example.com/lesson1.zip --title "Lesson 1" --wait
"""

import functools
import json
import sys
from pathlib import Path
from typing import Optional

import click

from quarjar import __version__
from quarjar.assets import delete_asset, get_asset, list_assets, upload_asset
from quarjar.config_utils import (
    CONFIG_FILENAME,
    create_config_template,
    get_config,
    make_client,
    require_course_id,
)
from quarjar.courses import get_course, get_next_lesson_order, list_lessons
from quarjar.errors import ConflictError, QuarjarError
from quarjar import icons as icon_set
from quarjar.icons import lesson_type_icon, log, use_ascii_icons
from quarjar.lessons import (
    LESSON_TYPES,
    create_lesson,
    create_lesson_with_content,
    create_lesson_with_web_package,
    get_lesson,
    list_content_items,
)
from quarjar.log_utils import setup_logging
from quarjar.packager import generate_zip_package
from quarjar.publish import publish_html_content
from quarjar.security_utils import mask_sensitive
from quarjar.web_packages import (
    create_web_package,
    delete_web_package,
    get_web_package,
    list_web_packages,
    wait_for_web_package,
)
from quarjar.workflow import SETUP_GUIDE_URL, next_steps, use_skilljar_workflow


# ============================================================================
# Configuration & Utilities
# ============================================================================

class QuarjarContext:
    """Shared context for CLI commands"""

    def __init__(self):
        self.project_root = Path.cwd()
        self._config = None
        self._client = None

    @property
    def config(self):
        if self._config is None:
            self._config = get_config(self.project_root)
        return self._config

    @property
    def client(self):
        if self._client is None:
            self._client = make_client(self.config)
        return self._client


def reports_errors(func):
    """Show QuarjarError reports as click errors (exit code 1)."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except QuarjarError as e:
            raise click.ClickException(str(e)) from e
    return wrapper


def echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


def _is_interactive() -> bool:
    return sys.stdin.isatty()


pass_quarjar = click.make_pass_decorator(QuarjarContext)


# ============================================================================
# Click Group Setup
# ============================================================================

@click.group()
@click.option('--verbose', '-v', count=True, help='More output (-vv for debug)')
@click.option('--quiet', '-q', is_flag=True, help='Only show warnings and errors')
@click.option('--ascii', 'ascii_only', is_flag=True, help='Use ASCII icons instead of emoji')
@click.pass_context
def cli(ctx, verbose: int, quiet: bool, ascii_only: bool):
    """
    quarjar - Publish Quarto content to Skilljar

    Set SKILLJAR_API_KEY (or api_key in quarjar.yaml) before using the
    API commands.
    """
    if ascii_only:
        use_ascii_icons()
    setup_logging(0 if quiet else 1 + verbose)
    ctx.obj = QuarjarContext()


# ============================================================================
# Packaging
# ============================================================================

@cli.command()
@click.argument('qmd_path', type=click.Path(dir_okay=False))
@click.option('--output-dir', '-o', type=click.Path(file_okay=False),
              help='Directory for the zip (default: next to the .qmd file)')
@click.option('--quiet', 'quiet_render', is_flag=True, help='Suppress render and zip output')
@click.option('--overwrite/--no-overwrite', default=True, show_default=True,
              help='Replace an existing zip file')
@reports_errors
def package(qmd_path: str, output_dir: Optional[str], quiet_render: bool, overwrite: bool):
    """
    Render a Quarto document and zip it for upload

    The zip contains a single _<name>/ directory with index.html at its
    root. The path of the zip is printed on success.

    Examples:
        quarjar package lesson1.qmd
        quarjar package lesson1.qmd --output-dir dist --no-overwrite
    """
    archive_path = generate_zip_package(
        qmd_path,
        output_dir=output_dir,
        quiet=quiet_render,
        overwrite=overwrite,
    )
    click.echo(str(archive_path))


# ============================================================================
# Publishing
# ============================================================================

@cli.command()
@click.option('--lesson-id', required=True, help='MODULAR lesson to add content to')
@click.option('--html', 'html_path', required=True, type=click.Path(dir_okay=False), help='Rendered HTML file')
@click.option('--title', required=True, help='Content item header')
@click.option('--order', default=0, show_default=True, type=int, help='Position within the lesson')
@pass_quarjar
@reports_errors
def publish(ctx: QuarjarContext, lesson_id: str, html_path: str, title: str, order: int):
    """
    Publish an HTML file as a content item in an existing lesson

    Example:
        quarjar publish --lesson-id 12345 --html _site/lesson.html --title "Lesson Content"
    """
    echo_json(publish_html_content(ctx.client, lesson_id, html_path, title, order=order))


# ============================================================================
# Courses
# ============================================================================

@cli.group()
def course():
    """Inspect Skilljar courses"""


@course.command('get')
@click.argument('course_id')
@pass_quarjar
@reports_errors
def course_get(ctx: QuarjarContext, course_id: str):
    """Show course details"""
    echo_json(get_course(ctx.client, course_id))


@course.command('lessons')
@click.argument('course_id', required=False)
@click.option('--json', 'as_json', is_flag=True, help='Output raw JSON')
@pass_quarjar
@reports_errors
def course_lessons(ctx: QuarjarContext, course_id: Optional[str], as_json: bool):
    """List the lessons in a course (defaults to the configured course)"""
    course_id = require_course_id(course_id, ctx.config)
    lessons = list_lessons(ctx.client, course_id)
    if as_json:
        echo_json(lessons)
        return

    results = (lessons or {}).get("results", [])
    if not results:
        click.echo("No lessons found.")
        return
    for lesson in sorted(results, key=lambda x: x.get("order") or 0):
        icon = lesson_type_icon(lesson.get("type", ""))
        click.echo(f"  {str(lesson.get('order', '?')):>3} {icon} {lesson.get('title', 'Untitled')} "
                   f"({lesson.get('type', '?')}, id={lesson.get('id')})")


@course.command('next-order')
@click.argument('course_id', required=False)
@pass_quarjar
@reports_errors
def course_next_order(ctx: QuarjarContext, course_id: Optional[str]):
    """Print the next free lesson order in a course"""
    course_id = require_course_id(course_id, ctx.config)
    click.echo(str(get_next_lesson_order(ctx.client, course_id)))


# ============================================================================
# Lessons
# ============================================================================

@cli.group()
def lesson():
    """Create and inspect lessons"""


@lesson.command('get')
@click.argument('lesson_id')
@pass_quarjar
@reports_errors
def lesson_get(ctx: QuarjarContext, lesson_id: str):
    """Show lesson details"""
    echo_json(get_lesson(ctx.client, lesson_id))


@lesson.command('items')
@click.argument('lesson_id')
@pass_quarjar
@reports_errors
def lesson_items(ctx: QuarjarContext, lesson_id: str):
    """List the content items of a lesson"""
    echo_json(list_content_items(ctx.client, lesson_id))


@lesson.command('create')
@click.option('--course-id', help='Course to add the lesson to (default: configured course)')
@click.option('--title', required=True, help='Lesson title')
@click.option('--type', 'lesson_type', type=click.Choice(LESSON_TYPES), default='MODULAR', show_default=True)
@click.option('--order', default=0, show_default=True, type=int)
@click.option('--description-html', default='', help='HTML description')
@click.option('--optional', is_flag=True, help='Mark the lesson optional')
@click.option('--fullscreen/--no-fullscreen', default=None, help='Display fullscreen (default: Skilljar decides)')
@pass_quarjar
@reports_errors
def lesson_create(ctx: QuarjarContext, course_id: Optional[str], title: str, lesson_type: str,
                  order: int, description_html: str, optional: bool, fullscreen: Optional[bool]):
    """
    Create a lesson without content

    Example:
        quarjar lesson create --course-id abc123 --title "Introduction"
    """
    course_id = require_course_id(course_id, ctx.config)
    echo_json(create_lesson(
        ctx.client, course_id, title,
        type=lesson_type,
        order=order,
        description_html=description_html,
        optional=optional,
        display_fullscreen=fullscreen,
    ))


@lesson.command('create-with-content')
@click.option('--course-id', help='Course to add the lesson to (default: configured course)')
@click.option('--title', required=True, help='Lesson title')
@click.option('--html', 'html_path', required=True, type=click.Path(dir_okay=False), help='Rendered HTML file')
@click.option('--content-title', required=True, help='Content item header')
@click.option('--order', type=int, default=None, help='Lesson position (default: next free)')
@click.option('--content-order', type=int, default=0, show_default=True)
@click.option('--description-html', default='', help='HTML description')
@click.option('--fullscreen/--no-fullscreen', default=None)
@pass_quarjar
@reports_errors
def lesson_create_with_content(ctx: QuarjarContext, course_id: Optional[str], title: str, html_path: str,
                               content_title: str, order: Optional[int], content_order: int,
                               description_html: str, fullscreen: Optional[bool]):
    """
    Create a MODULAR lesson and add HTML content to it

    Example:
        quarjar lesson create-with-content --course-id abc123 \\
            --title "Intro" --html _site/intro.html --content-title "Content"
    """
    course_id = require_course_id(course_id, ctx.config)
    echo_json(create_lesson_with_content(
        ctx.client, course_id, title, html_path, content_title,
        lesson_order=order,
        content_order=content_order,
        description_html=description_html,
        display_fullscreen=fullscreen,
    ))


@lesson.command('create-web-package')
@click.option('--course-id', help='Course to add the lesson to (default: configured course)')
@click.option('--title', required=True, help='Lesson title')
@click.option('--web-package-id', required=True, help='Existing web package')
@click.option('--description', default=None, help='HTML description')
@click.option('--order', type=int, default=None, help='Lesson position (default: next free)')
@click.option('--fullscreen/--no-fullscreen', default=None)
@pass_quarjar
@reports_errors
def lesson_create_web_package(ctx: QuarjarContext, course_id: Optional[str], title: str, web_package_id: str,
                              description: Optional[str], order: Optional[int], fullscreen: Optional[bool]):
    """Create a WEB_PACKAGE lesson for an existing web package"""
    course_id = require_course_id(course_id, ctx.config)
    echo_json(create_lesson_with_web_package(
        ctx.client, course_id, title, web_package_id,
        description=description,
        display_fullscreen=fullscreen,
        order=order,
    ))


# ============================================================================
# Assets
# ============================================================================

@cli.group()
def asset():
    """Upload and manage assets"""


@asset.command('upload')
@click.argument('file_path', type=click.Path(dir_okay=False))
@pass_quarjar
@reports_errors
def asset_upload(ctx: QuarjarContext, file_path: str):
    """Upload a file and print its asset ID"""
    click.echo(upload_asset(ctx.client, file_path))


@asset.command('list')
@click.option('--page', default=1, show_default=True, type=int)
@click.option('--page-size', default=20, show_default=True, type=int)
@pass_quarjar
@reports_errors
def asset_list(ctx: QuarjarContext, page: int, page_size: int):
    """List assets"""
    echo_json(list_assets(ctx.client, page=page, page_size=page_size))


@asset.command('get')
@click.argument('asset_id')
@pass_quarjar
@reports_errors
def asset_get(ctx: QuarjarContext, asset_id: str):
    """Show asset details (includes a signed download URL)"""
    echo_json(get_asset(ctx.client, asset_id))


@asset.command('delete')
@click.argument('asset_id')
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
@pass_quarjar
@reports_errors
def asset_delete(ctx: QuarjarContext, asset_id: str, yes: bool):
    """Delete an asset"""
    if not yes:
        click.confirm(f"Delete asset {asset_id} from Skilljar?", abort=True)
    delete_asset(ctx.client, asset_id)
    click.echo(log(icon_set.icons.SUCCESS, f"Asset {asset_id} deleted"))


# ============================================================================
# Web packages
# ============================================================================

@cli.group('web-package')
def web_package():
    """Create and manage web packages"""


@web_package.command('create')
@click.argument('content_url')
@click.option('--title', required=True, help='Web package title')
@click.option('--redirect/--no-redirect', 'redirect_on_completion', default=True, show_default=True,
              help='Redirect on completion')
@click.option('--sync/--no-sync', 'sync_on_completion', default=False, show_default=True,
              help='Synchronize completion')
@click.option('--wait', is_flag=True, help='Wait until Skilljar has processed the package')
@click.option('--timeout', default=300.0, show_default=True, type=float, help='Seconds to wait with --wait')
@pass_quarjar
@reports_errors
def web_package_create(ctx: QuarjarContext, content_url: str, title: str, redirect_on_completion: bool,
                       sync_on_completion: bool, wait: bool, timeout: float):
    """
    Create a web package from a public zip URL

    Example:
        quarjar web-package create https://example.com/lesson1.zip --title "Lesson 1" --wait
    """
    pkg = create_web_package(
        ctx.client, content_url, title,
        redirect_on_completion=redirect_on_completion,
        sync_on_completion=sync_on_completion,
    )
    if wait:
        pkg = wait_for_web_package(ctx.client, pkg["id"], timeout=timeout)
    echo_json(pkg)


@web_package.command('get')
@click.argument('web_package_id')
@pass_quarjar
@reports_errors
def web_package_get(ctx: QuarjarContext, web_package_id: str):
    """Show web package details"""
    echo_json(get_web_package(ctx.client, web_package_id))


@web_package.command('list')
@click.option('--page', default=1, show_default=True, type=int)
@click.option('--page-size', default=20, show_default=True, type=int)
@pass_quarjar
@reports_errors
def web_package_list(ctx: QuarjarContext, page: int, page_size: int):
    """List web packages"""
    echo_json(list_web_packages(ctx.client, page=page, page_size=page_size))


@web_package.command('delete')
@click.argument('web_package_id')
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
@pass_quarjar
@reports_errors
def web_package_delete(ctx: QuarjarContext, web_package_id: str, yes: bool):
    """Delete a web package (only if no lesson uses it)"""
    if not yes:
        click.confirm(f"Delete web package {web_package_id} from Skilljar?", abort=True)
    delete_web_package(ctx.client, web_package_id)
    click.echo(log(icon_set.icons.SUCCESS, f"Web package {web_package_id} deleted"))


# ============================================================================
# Project setup
# ============================================================================

@cli.command('use-workflow')
@click.option('--overwrite', is_flag=True, help='Replace an existing workflow file')
@pass_quarjar
@reports_errors
def use_workflow(ctx: QuarjarContext, overwrite: bool):
    """
    Add the GitHub Actions workflow that publishes to Skilljar

    Writes .github/workflows/publish-quarto-to-skilljar.yml in the
    current Git repository.
    """
    try:
        target = use_skilljar_workflow(ctx.project_root, overwrite=overwrite)
    except ConflictError:
        if not _is_interactive():
            raise
        click.echo(f"Workflow file already exists in {ctx.project_root / '.github' / 'workflows'}")
        if not click.confirm("Overwrite?", default=False):
            click.echo("Workflow installation cancelled.")
            return
        target = use_skilljar_workflow(ctx.project_root, overwrite=True)

    click.echo()
    click.echo(log(icon_set.icons.SUCCESS, f"Added GitHub Actions workflow: {target}"))
    click.echo("\nNext steps:")
    for i, step in enumerate(next_steps(), start=1):
        click.echo(f"  {i}. {step}")
    click.echo(f"\nFor complete setup instructions, see: {SETUP_GUIDE_URL}")


@cli.command()
@click.option('--course-id', help='Skilljar course ID to write into quarjar.yaml')
@click.option('--force', is_flag=True, help='Overwrite an existing quarjar.yaml')
@pass_quarjar
def init(ctx: QuarjarContext, course_id: Optional[str], force: bool):
    """
    Write a quarjar.yaml configuration template

    Examples:
        quarjar init
        quarjar init --course-id abc123
    """
    yaml_path = ctx.project_root / CONFIG_FILENAME
    if yaml_path.exists() and not force:
        click.echo(log(icon_set.icons.WARNING, f"{CONFIG_FILENAME} already exists (use --force to overwrite)"), err=True)
        sys.exit(1)

    content = create_config_template()
    if course_id:
        content = content.replace("REPLACE_WITH_YOUR_COURSE_ID", course_id)
    yaml_path.write_text(content, encoding="utf-8")
    click.echo(log(icon_set.icons.SUCCESS, f"Created {yaml_path}"))


@cli.command()
@pass_quarjar
def info(ctx: QuarjarContext):
    """Show resolved configuration and where each value came from"""
    config = ctx.config
    click.echo("quarjar configuration\n")
    click.echo("=" * 60)
    click.echo(f"Project Root: {ctx.project_root}")
    click.echo(f"Base URL:     {config.base_url}  ({config.source_of('base_url')})")
    if config.api_key:
        click.echo(f"API Key:      {mask_sensitive(config.api_key)}  ({config.source_of('api_key')})")
    else:
        click.echo("API Key:      Not set (export SKILLJAR_API_KEY or add api_key to quarjar.yaml)")
    click.echo(f"Course ID:    {config.course_id or 'Not set'}"
               + (f"  ({config.source_of('course_id')})" if config.course_id else ""))
    click.echo(f"Timeouts:     connect={config.timeout[0]}s read={config.timeout[1]}s "
               f"upload={config.upload_timeout[1]}s")
    if config.extra:
        click.echo(f"Extra keys:   {', '.join(sorted(config.extra))}")


@cli.command()
def version():
    """Show quarjar version"""
    click.echo(f"quarjar v{__version__}")
    click.echo("Publish Quarto content to Skilljar")


# ============================================================================
# Entry Point
# ============================================================================

if __name__ == '__main__':
    cli()
