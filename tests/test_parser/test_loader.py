"""Tests for specfetch.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from specfetch.exceptions import SpecParseError
from specfetch.parser.loader import _parse_content, load_spec, validate_spec_version

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _url_response(body: bytes, content_type: str, status: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code=status,
        content=body,
        headers={"content-type": content_type},
        request=httpx.Request("GET", "https://example.com/openapi"),
    )


# ---------------------------------------------------------------------------
# load_spec dispatch
# ---------------------------------------------------------------------------


class TestLoadSpec:
    """Test load_spec routes each source to the right loader."""

    def test_loads_json_file(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "petstore_3.0.json"))
        assert result["openapi"] == "3.0.3"
        assert result["info"]["title"] == "Petstore API"

    def test_loads_swagger_file(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "upload_2.0.json"))
        assert result["swagger"] == "2.0"

    def test_loads_yaml_file(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "spec.yaml"
        spec_file.write_text(
            textwrap.dedent("""\
                openapi: "3.0.3"
                info:
                  title: YAML Test
                  version: "1.0.0"
                paths: {}
            """),
            encoding="utf-8",
        )
        result = load_spec(str(spec_file))
        assert result["info"]["title"] == "YAML Test"

    def test_loads_yml_extension(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "spec.yml"
        spec_file.write_text('openapi: "3.1.0"\ninfo: {title: t, version: "1"}\n', encoding="utf-8")
        assert load_spec(str(spec_file))["openapi"] == "3.1.0"

    def test_loads_from_stdin(self) -> None:
        spec_json = json.dumps({"openapi": "3.0.3", "info": {"title": "stdin", "version": "1"}})
        with patch("specfetch.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(spec_json)
            result = load_spec("-")
        assert result["info"]["title"] == "stdin"

    def test_empty_stdin_raises(self) -> None:
        with patch("specfetch.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("   \n")
            with pytest.raises(SpecParseError, match="No input"):
                load_spec("-")

    def test_loads_from_url(self) -> None:
        body = json.dumps({"openapi": "3.0.3", "info": {"title": "URL", "version": "1"}})
        with patch(
            "specfetch.parser.loader.httpx.get",
            return_value=_url_response(body.encode(), "application/json"),
        ) as mock_get:
            result = load_spec("https://example.com/openapi.json")

        assert result["info"]["title"] == "URL"
        mock_get.assert_called_once()

    def test_loads_yaml_from_url(self) -> None:
        body = b"openapi: '3.0.0'\ninfo:\n  title: YAML URL\n  version: '1'\n"
        with patch(
            "specfetch.parser.loader.httpx.get",
            return_value=_url_response(body, "application/x-yaml"),
        ):
            result = load_spec("https://example.com/openapi.yaml")
        assert result["info"]["title"] == "YAML URL"


# ---------------------------------------------------------------------------
# Failure modes
# ---------------------------------------------------------------------------


class TestLoadFailures:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            load_spec(str(tmp_path / "missing.json"))

    def test_empty_file(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "empty.json"
        spec_file.write_text("  ", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty"):
            load_spec(str(spec_file))

    def test_invalid_json_with_json_extension(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "bad.json"
        spec_file.write_text("{not: valid", encoding="utf-8")
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            load_spec(str(spec_file))

    def test_http_error_status(self) -> None:
        with patch(
            "specfetch.parser.loader.httpx.get",
            return_value=_url_response(b"gone", "text/plain", status=404),
        ):
            with pytest.raises(SpecParseError, match="HTTP 404"):
                load_spec("https://example.com/openapi.json")

    def test_network_error(self) -> None:
        with patch(
            "specfetch.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("refused"),
        ):
            with pytest.raises(SpecParseError, match="Failed to fetch"):
                load_spec("https://example.com/openapi.json")


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    def test_json_without_hint(self) -> None:
        assert _parse_content('{"a": 1}') == {"a": 1}

    def test_yaml_fallback_without_hint(self) -> None:
        assert _parse_content("a: 1\nb: two\n") == {"a": 1, "b": "two"}

    def test_yaml_hint_skips_json(self) -> None:
        assert _parse_content('{"a": 1}', hint="yaml") == {"a": 1}

    def test_scalar_document_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="must be a JSON/YAML object"):
            _parse_content("[1, 2, 3]")

    def test_unparseable_reports_both_errors(self) -> None:
        with pytest.raises(SpecParseError) as exc_info:
            _parse_content("key: [unclosed")
        message = str(exc_info.value)
        assert "JSON error" in message
        assert "YAML error" in message


# ---------------------------------------------------------------------------
# validate_spec_version
# ---------------------------------------------------------------------------


class TestValidateSpecVersion:
    @pytest.mark.parametrize("version", ["3.0.0", "3.0.3", "3.1.0"])
    def test_openapi_3(self, version: str) -> None:
        assert validate_spec_version({"openapi": version}) == version

    def test_swagger_2(self) -> None:
        assert validate_spec_version({"swagger": "2.0"}) == "2.0"

    def test_swagger_other_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="Unsupported Swagger"):
            validate_spec_version({"swagger": "1.2"})

    def test_openapi_other_rejected(self) -> None:
        with pytest.raises(SpecParseError, match="Unsupported OpenAPI"):
            validate_spec_version({"openapi": "4.0.0"})

    def test_missing_version(self) -> None:
        with pytest.raises(SpecParseError, match="Missing"):
            validate_spec_version({"info": {}})
