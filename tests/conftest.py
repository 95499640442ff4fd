# tests/conftest.py
"""
Pytest configuration and shared fixtures for quarjar tests
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
import requests

from quarjar import packager
from quarjar.skilljar_client import SkilljarClient


TEST_API_KEY = "sk-test-0123456789abcdef"
TEST_BASE_URL = "https://api.skilljar.test"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path_factory):
    """Keep real credentials and the user's global config out of tests"""
    for name in ("SKILLJAR_API_KEY", "SKILLJAR_BASE_URL", "SKILLJAR_COURSE_ID", "QUARTO_PATH"):
        monkeypatch.delenv(name, raising=False)
    missing = tmp_path_factory.mktemp("home") / "config.yaml"
    monkeypatch.setenv("QUARJAR_CONFIG", str(missing))


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI tests call setup_logging, which replaces root handlers"""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ============================================================================
# Packaging fixtures
# ============================================================================

@pytest.fixture
def sample_qmd(tmp_path: Path) -> Path:
    """A Quarto document in its own lessons/ directory"""
    lessons = tmp_path / "lessons"
    lessons.mkdir()
    qmd = lessons / "lesson1.qmd"
    qmd.write_text(
        "---\ntitle: \"Lesson 1\"\n---\n\n# Welcome\n\nSome *content*.\n",
        encoding="utf-8",
    )
    return qmd


class FakeRender:
    """Stands in for quarto: writes <output_dir>/<entry_point> from the source"""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.extra_files: Dict[str, str] = {}
        self.error: Optional[Exception] = None

    def __call__(self, source_path, entry_point, output_dir, quiet=False):
        self.calls.append({
            "source_path": Path(source_path),
            "entry_point": entry_point,
            "output_dir": Path(output_dir),
            "quiet": quiet,
            "cwd": Path(os.getcwd()),
        })
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        if self.error is not None:
            raise self.error
        text = Path(source_path).read_text(encoding="utf-8")
        (out / entry_point).write_text(f"<html><body>{text}</body></html>", encoding="utf-8")
        for rel, content in self.extra_files.items():
            target = out / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")


@pytest.fixture
def fake_render(monkeypatch) -> FakeRender:
    """Replace the quarto render step for the duration of a test"""
    render = FakeRender()
    monkeypatch.setattr(packager, "render_document", render)
    return render


# ============================================================================
# API fixtures
# ============================================================================

def make_response(status_code: int = 200, body: Any = None, text: Optional[str] = None,
                  url: str = TEST_BASE_URL) -> requests.Response:
    """Build a real requests.Response with a JSON (or raw text) body"""
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = url
    if text is not None:
        resp._content = text.encode("utf-8")
    elif body is not None:
        resp._content = json.dumps(body).encode("utf-8")
    else:
        resp._content = b""
    resp.encoding = "utf-8"
    return resp


@pytest.fixture
def response() -> Callable[..., requests.Response]:
    return make_response


@pytest.fixture
def client(mocker) -> SkilljarClient:
    """SkilljarClient whose session.request is a mock"""
    api = SkilljarClient(TEST_API_KEY, base_url=TEST_BASE_URL)
    mocker.patch.object(api.session, "request")
    api.session.request.return_value = make_response(200, {})
    return api


def last_request(api: SkilljarClient):
    """(method, url, kwargs) of the most recent request"""
    args, kwargs = api.session.request.call_args
    return args[0], args[1], kwargs
