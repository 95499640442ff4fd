# tests/test_skilljar_client.py
"""
Tests for skilljar_client.py - authentication, URLs and error reporting
"""
import pytest
import requests
from requests.auth import HTTPBasicAuth

from quarjar.config_utils import QuarjarConfig
from quarjar.errors import ConfigurationError, SkilljarAPIError
from quarjar.skilljar_client import SkilljarClient, format_error_detail

from conftest import TEST_API_KEY, TEST_BASE_URL, last_request, make_response


class TestClientSetup:
    """Construction and configuration"""

    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError, match="api_key is required"):
            SkilljarClient("")

    def test_basic_auth_with_empty_password(self):
        api = SkilljarClient(TEST_API_KEY)

        assert isinstance(api.session.auth, HTTPBasicAuth)
        assert api.session.auth.username == TEST_API_KEY
        assert api.session.auth.password == ""
        assert api.session.headers["Accept"] == "application/json"

    def test_default_base_url(self):
        assert SkilljarClient(TEST_API_KEY).base_url == "https://api.skilljar.com"

    def test_trailing_slash_stripped(self):
        api = SkilljarClient(TEST_API_KEY, base_url="https://example.test/")
        assert api.url("v1/lessons") == "https://example.test/v1/lessons"

    def test_url_joins_segments(self):
        api = SkilljarClient(TEST_API_KEY, base_url=TEST_BASE_URL)
        assert api.url("v1/lessons", 42, "content-items") == f"{TEST_BASE_URL}/v1/lessons/42/content-items"

    def test_from_config(self):
        config = QuarjarConfig(api_key="abc", base_url="https://sj.test", timeout=(1, 2), upload_timeout=(1, 9))
        api = SkilljarClient.from_config(config)

        assert api.base_url == "https://sj.test"
        assert api.timeout == (1, 2)
        assert api.upload_timeout == (1, 9)

    def test_repr_masks_key(self):
        text = repr(SkilljarClient(TEST_API_KEY))
        assert TEST_API_KEY not in text
        assert "****" in text


class TestRequests:
    """Request dispatch through the session"""

    def test_get_decodes_json(self, client):
        client.session.request.return_value = make_response(200, {"id": "c1"})

        assert client.get("v1/courses", "c1") == {"id": "c1"}
        method, url, kwargs = last_request(client)
        assert method == "GET"
        assert url == f"{TEST_BASE_URL}/v1/courses/c1"
        assert kwargs["timeout"] == client.timeout

    def test_post_sends_json(self, client):
        client.session.request.return_value = make_response(201, {"id": 7})

        client.post("v1/lessons", json={"title": "T"})

        method, _, kwargs = last_request(client)
        assert method == "POST"
        assert kwargs["json"] == {"title": "T"}

    def test_file_uploads_use_upload_timeout(self, client):
        client.session.request.return_value = make_response(201, {"id": 1})

        client.post("v1/assets", files={"file": ("a.txt", b"x")})

        _, _, kwargs = last_request(client)
        assert kwargs["timeout"] == client.upload_timeout

    def test_empty_body_decodes_to_none(self, client):
        client.session.request.return_value = make_response(204)

        assert client.get("v1/assets", "1") is None

    def test_non_json_body(self, client):
        client.session.request.return_value = make_response(200, text="<html>oops</html>")

        with pytest.raises(SkilljarAPIError, match="Expected a JSON response"):
            client.get("v1/assets", "1")

    def test_transport_error(self, client):
        client.session.request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(SkilljarAPIError) as exc_info:
            client.get("v1/courses", "c1", operation="retrieve course")

        assert "Failed to perform retrieve course" in exc_info.value.message
        assert isinstance(exc_info.value.cause, requests.ConnectionError)


class TestHttpErrors:
    """Status >= 400 becomes SkilljarAPIError"""

    def test_field_errors_become_bullets(self, client):
        client.session.request.return_value = make_response(
            400, {"title": ["This field is required."], "order": ["Must be >= 0.", "Invalid."]}
        )

        with pytest.raises(SkilljarAPIError) as exc_info:
            client.post("v1/lessons", operation="create lesson 'Intro'", json={})

        err = exc_info.value
        assert err.status_code == 400
        assert err.operation == "create lesson 'Intro'"
        assert err.message.startswith("Failed to create lesson 'Intro' (HTTP 400):")
        assert "  • title: This field is required." in err.message
        assert "  • order: Must be >= 0., Invalid." in err.message

    def test_raw_body_kept(self, client):
        client.session.request.return_value = make_response(502, text="Bad Gateway")

        with pytest.raises(SkilljarAPIError) as exc_info:
            client.get("v1/lessons", operation="list lessons")

        assert exc_info.value.message == "Failed to list lessons (HTTP 502):\nBad Gateway"
        assert exc_info.value.body == "Bad Gateway"

    def test_delete_error(self, client):
        client.session.request.return_value = make_response(409, {"detail": "Asset is in use"})

        with pytest.raises(SkilljarAPIError, match="HTTP 409"):
            client.delete("v1/assets", "9", operation="delete asset")


class TestFormatErrorDetail:
    def test_non_json(self):
        assert format_error_detail("plain text") == "plain text"

    def test_json_list_is_unchanged(self):
        assert format_error_detail('["a", "b"]') == '["a", "b"]'

    def test_nested_object(self):
        assert format_error_detail('{"web_package": {"title": ["bad"]}}') == \
            '  • web_package: {"title": ["bad"]}'
