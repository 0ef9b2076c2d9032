# tests/test_providers.py
"""
Source Tests - Unit Tests for the HNB Exchange List Fetcher

This module tests HnbSource: request parameters, streaming into the parser,
translation of transport failures and rejection of malformed payloads.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- hnbrate.adapters.providers.hnb (HnbSource for testing)
- unittest.mock (Mock for API mocking)
- pytest (testing framework)
"""
import pytest

from datetime import date
from decimal import Decimal
from unittest.mock import Mock, patch
import requests

from hnbrate.adapters.providers.hnb import HnbSource
from hnbrate.domain.errors import SourceFormatError, SourceUnavailableError


def _response(payload: str, status_code: int = 200, encoding="utf-8") -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.encoding = encoding
    resp.iter_lines.return_value = iter(payload.splitlines())
    return resp


class TestHnbSourceInit:
    def test_init_with_defaults(self):
        source = HnbSource()
        assert source.url == "http://www.hnb.hr/tecajn/htecajn.htm"
        assert source.timeout == 10
        assert source.encoding == "windows-1250"

    def test_init_with_custom_params(self):
        source = HnbSource(url="http://test.com/list.txt", timeout=3, encoding="utf-8")
        assert source.url == "http://test.com/list.txt"
        assert source.timeout == 3
        assert source.encoding == "utf-8"


class TestHnbSourceFetch:
    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_success(self, mock_get, full_payload):
        resp = _response(full_payload)
        mock_get.return_value = resp

        snapshot = HnbSource(url="http://test.com").fetch()

        assert snapshot.application_date == date(2017, 3, 25)
        assert len(snapshot.rates) == 13
        assert snapshot.rates["JPY"].middle == Decimal("0.06179791")
        mock_get.assert_called_once_with("http://test.com", timeout=10, stream=True)
        resp.iter_lines.assert_called_once_with(decode_unicode=True)
        resp.close.assert_called_once()

    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_sets_fallback_encoding(self, mock_get, usd_eur_payload):
        resp = _response(usd_eur_payload, encoding=None)
        mock_get.return_value = resp

        HnbSource(encoding="windows-1250").fetch()

        assert resp.encoding == "windows-1250"

    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_keeps_declared_encoding(self, mock_get, usd_eur_payload):
        resp = _response(usd_eur_payload, encoding="iso-8859-2")
        mock_get.return_value = resp

        HnbSource().fetch()

        assert resp.encoding == "iso-8859-2"

    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()

        with pytest.raises(SourceUnavailableError, match="timeout"):
            HnbSource().fetch()

    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_connection_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(SourceUnavailableError, match="request failed"):
            HnbSource().fetch()

    @pytest.mark.parametrize("status_code", [204, 404, 500, 503])
    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_non_200(self, mock_get, status_code, usd_eur_payload):
        resp = _response(usd_eur_payload, status_code=status_code)
        mock_get.return_value = resp

        with pytest.raises(SourceUnavailableError, match=f"HTTP {status_code}"):
            HnbSource().fetch()
        resp.close.assert_called_once()
        resp.iter_lines.assert_not_called()

    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_stream_interrupted(self, mock_get):
        resp = _response("")
        resp.iter_lines.side_effect = requests.exceptions.ChunkedEncodingError("connection reset")
        mock_get.return_value = resp

        with pytest.raises(SourceUnavailableError, match="could not be read"):
            HnbSource().fetch()
        resp.close.assert_called_once()

    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_stream_interrupted_midway(self, mock_get):
        def lines():
            yield "059240320172503201713"
            yield "840USD001       6,839371       6,859951       6,880531"
            raise requests.exceptions.ChunkedEncodingError("connection reset")

        resp = _response("")
        resp.iter_lines.return_value = lines()
        mock_get.return_value = resp

        with pytest.raises(SourceUnavailableError, match="could not be read"):
            HnbSource().fetch()
        resp.close.assert_called_once()

    @patch('hnbrate.adapters.providers.hnb.time')
    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_slow_body_exceeds_timeout(self, mock_get, mock_time, usd_eur_payload):
        resp = _response(usd_eur_payload)
        mock_get.return_value = resp
        # start, then one reading per line: the third line arrives after the deadline
        mock_time.monotonic.side_effect = [100.0, 101.0, 102.0, 130.0]

        with pytest.raises(SourceUnavailableError, match="exceeded 10s"):
            HnbSource(timeout=10).fetch()
        resp.close.assert_called_once()

    @patch('hnbrate.adapters.providers.hnb.time')
    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_within_timeout(self, mock_get, mock_time, usd_eur_payload):
        mock_get.return_value = _response(usd_eur_payload)
        mock_time.monotonic.side_effect = [100.0, 101.0, 105.0, 109.5]

        snapshot = HnbSource(timeout=10).fetch()

        assert set(snapshot.rates) == {"USD", "EUR"}

    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_malformed_payload(self, mock_get, usd_eur_payload):
        resp = _response(usd_eur_payload + "985PLN001 1,730993\n")
        mock_get.return_value = resp

        with pytest.raises(SourceFormatError) as excinfo:
            HnbSource().fetch()
        assert excinfo.value.line_no == 4
        resp.close.assert_called_once()

    @patch('hnbrate.adapters.providers.hnb.requests.get')
    def test_fetch_empty_body(self, mock_get):
        mock_get.return_value = _response("")

        with pytest.raises(SourceFormatError, match="no header"):
            HnbSource().fetch()
