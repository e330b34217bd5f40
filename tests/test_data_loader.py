"""
Streamlit Data Loader Tests - ISO 27001 Risk Assessment
tests/test_data_loader.py

Tests for the UI's API helpers: error mapping on report downloads.
"""
import sys
from pathlib import Path

import pytest
import requests
from unittest.mock import patch, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent / "streamlit"))

import data_loader  # noqa: E402
from data_loader import ApiError  # noqa: E402


def _response(status_code, json_body=None, text="", content=b""):
    r = MagicMock()
    r.status_code = status_code
    r.text = text
    r.content = content
    if json_body is None:
        r.json.side_effect = ValueError("no json")
    else:
        r.json.return_value = json_body
    return r


class TestDownloads:

    def test_pdf_returns_bytes(self):
        with patch.object(data_loader.requests, "request", return_value=_response(200, content=b"%PDF-1.4")):
            assert data_loader.download_pdf("abc") == b"%PDF-1.4"

    def test_markdown_not_found_raises_api_error(self):
        body = {"error": "Assessment not found", "error_code": "ASSESSMENT_NOT_FOUND"}
        with patch.object(data_loader.requests, "request", return_value=_response(404, body)):
            with pytest.raises(ApiError) as exc:
                data_loader.download_markdown("missing")
        assert exc.value.status_code == 404
        assert exc.value.message == "Assessment not found"

    def test_portfolio_sends_bearer_token(self):
        with patch.object(data_loader.requests, "request", return_value=_response(200, text="# Summary")) as mock_req:
            assert data_loader.download_portfolio_summary("tok") == "# Summary"
        assert mock_req.call_args.kwargs["headers"]["Authorization"] == "Bearer tok"

    def test_portfolio_unauthorized_raises_api_error(self):
        with patch.object(data_loader.requests, "request", return_value=_response(401, {"error": "Unauthorized"})):
            with pytest.raises(ApiError) as exc:
                data_loader.download_portfolio_summary("expired")
        assert exc.value.message == "Unauthorized"

    def test_non_json_error_uses_body_text(self):
        with patch.object(data_loader.requests, "request", return_value=_response(502, text="Bad Gateway")):
            with pytest.raises(ApiError) as exc:
                data_loader.download_pdf("abc")
        assert exc.value.message == "Bad Gateway"

    def test_connection_error_propagates(self):
        with patch.object(data_loader.requests, "request", side_effect=requests.ConnectionError("refused")):
            with pytest.raises(requests.RequestException):
                data_loader.download_markdown("abc")
