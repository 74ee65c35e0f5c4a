"""
Tests for fetcher protocol, registry, mock, and HTTP fetchers.
"""

import subprocess
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from dust_installer.adapters.http import CurlFetcher, UrllibFetcher, WgetFetcher
from dust_installer.adapters.http.command import CommandFetcher
from dust_installer.adapters.mock import MockFetcher
from dust_installer.adapters.registry import AUTO_ORDER, FetcherRegistry, default_registry
from dust_installer.core.errors import ToolingMissing

# ── Mock Fetcher Tests ───────────────────────────────────────────────


class TestMockFetcher:
    def test_unknown_url_is_404(self):
        mock = MockFetcher()
        receipt = mock.fetch("https://example.com/missing")
        assert receipt.failed
        assert receipt.http_status == 404
        assert mock.call_count == 1

    def test_set_body(self):
        mock = MockFetcher()
        mock.set_body("https://example.com/a", b"hello")
        receipt = mock.fetch("https://example.com/a")
        assert receipt.ok
        assert receipt.body == b"hello"

    def test_set_failure(self):
        mock = MockFetcher()
        mock.set_failure("https://example.com/a", error="Intentional failure", http_status=500)
        receipt = mock.fetch("https://example.com/a")
        assert receipt.failed
        assert "Intentional failure" in receipt.error

    def test_default_body(self):
        mock = MockFetcher(default_body=b"x")
        assert mock.fetch("https://anything").body == b"x"

    def test_call_log_and_hooks(self):
        mock = MockFetcher()
        seen = []
        mock.on_fetch(seen.append)
        mock.fetch("https://a")
        mock.fetch("https://b")
        assert mock.call_log == ["https://a", "https://b"]
        assert seen == ["https://a", "https://b"]

    def test_reset(self):
        mock = MockFetcher()
        mock.set_body("https://a", b"1")
        mock.fetch("https://a")
        mock.reset()
        assert mock.call_count == 0
        assert mock.fetch("https://a").failed

    def test_is_available(self):
        assert MockFetcher(available=True).is_available()
        assert not MockFetcher(available=False).is_available()


# ── Registry Tests ───────────────────────────────────────────────────


class TestFetcherRegistry:
    def test_register_and_get(self):
        registry = FetcherRegistry()
        mock = MockFetcher(fetcher_name="curl")
        registry.register(mock)
        assert registry.get("curl") is mock
        assert registry.list_fetchers() == ["curl"]

    def test_unregister(self):
        registry = FetcherRegistry()
        registry.register(MockFetcher(fetcher_name="curl"))
        registry.unregister("curl")
        assert registry.get("curl") is None

    def test_auto_prefers_curl(self):
        registry = FetcherRegistry()
        for name in ("urllib", "wget", "curl"):
            registry.register(MockFetcher(fetcher_name=name))
        assert registry.select("auto").name == "curl"

    def test_auto_falls_back_to_wget(self):
        registry = FetcherRegistry()
        registry.register(MockFetcher(fetcher_name="curl", available=False))
        registry.register(MockFetcher(fetcher_name="wget"))
        assert registry.select().name == "wget"

    def test_auto_uses_unlisted_fetcher_last(self):
        registry = FetcherRegistry()
        registry.register(MockFetcher(fetcher_name="mock"))
        registry.register(MockFetcher(fetcher_name="curl", available=False))
        assert registry.select().name == "mock"

    def test_auto_nothing_available(self):
        registry = FetcherRegistry()
        registry.register(MockFetcher(fetcher_name="curl", available=False))
        registry.register(MockFetcher(fetcher_name="wget", available=False))
        with pytest.raises(ToolingMissing, match="Please install curl or wget"):
            registry.select("auto")

    def test_named_unavailable(self):
        registry = FetcherRegistry()
        registry.register(MockFetcher(fetcher_name="wget", available=False))
        with pytest.raises(ToolingMissing, match="not available"):
            registry.select("wget")

    def test_named_unknown(self):
        with pytest.raises(ToolingMissing, match="Unknown HTTP client"):
            FetcherRegistry().select("aria2")

    def test_fetcher_status(self):
        registry = FetcherRegistry()
        registry.register(MockFetcher(fetcher_name="curl", available=False))
        status = registry.fetcher_status()
        assert status["curl"]["available"] is False
        assert status["curl"]["type"] == "MockFetcher"

    def test_default_registry(self):
        registry = default_registry()
        assert set(registry.list_fetchers()) == set(AUTO_ORDER)
        assert registry.get("urllib").is_available()


# ── Command Fetcher Tests ────────────────────────────────────────────


class TestCommandFetchers:
    def test_curl_command(self):
        assert CurlFetcher().build_command("https://x", None) == ["curl", "-sSfL", "https://x"]
        assert CurlFetcher().build_command("https://x", 30) == [
            "curl", "-sSfL", "--max-time", "30", "https://x",
        ]

    def test_wget_command(self):
        assert WgetFetcher().build_command("https://x", None) == ["wget", "-qO-", "https://x"]
        assert WgetFetcher().build_command("https://x", 5) == [
            "wget", "-qO-", "--timeout=5", "https://x",
        ]

    def test_base_requires_build_command(self):
        class Bare(CommandFetcher):
            executable = "fetch"

        with pytest.raises(TypeError, match="build_command"):
            Bare()

    def test_is_available_uses_which(self):
        with patch("dust_installer.adapters.http.command.shutil.which", return_value=None):
            assert not CurlFetcher().is_available()
        with patch("dust_installer.adapters.http.command.shutil.which", return_value="/usr/bin/curl"):
            assert CurlFetcher().is_available()

    @patch("dust_installer.adapters.http.command.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout=b"body", stderr=b"",
        )
        receipt = CurlFetcher().fetch("https://x")
        assert receipt.ok
        assert receipt.body == b"body"
        assert receipt.fetcher == "curl"
        assert mock_run.call_args.kwargs["timeout"] is None

    @patch("dust_installer.adapters.http.command.subprocess.run")
    def test_http_error_exit(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=22, stdout=b"", stderr=b"curl: (22) The requested URL returned error: 404",
        )
        receipt = CurlFetcher().fetch("https://x")
        assert receipt.failed
        assert "404" in receipt.error
        assert receipt.metadata["return_code"] == 22

    @patch("dust_installer.adapters.http.command.subprocess.run")
    def test_silent_failure(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=8, stdout=b"", stderr=b"",
        )
        receipt = WgetFetcher().fetch("https://x")
        assert receipt.error == "wget exited with code 8"

    @patch("dust_installer.adapters.http.command.subprocess.run")
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="curl", timeout=15)
        receipt = CurlFetcher().fetch("https://x", timeout=10)
        assert receipt.failed
        assert "timed out" in receipt.error
        assert mock_run.call_args.kwargs["timeout"] == 15

    @patch("dust_installer.adapters.http.command.subprocess.run")
    def test_missing_binary(self, mock_run):
        mock_run.side_effect = FileNotFoundError("curl")
        receipt = CurlFetcher().fetch("https://x")
        assert receipt.failed
        assert "could not run" in receipt.error


# ── urllib Fetcher Tests ─────────────────────────────────────────────


class TestUrllibFetcher:
    @patch("dust_installer.adapters.http.urllib_fetcher.urllib.request.urlopen")
    def test_success(self, mock_urlopen):
        resp = MagicMock()
        resp.read.return_value = b'{"tag_name": "v1.0.0"}'
        resp.getcode.return_value = 200
        mock_urlopen.return_value.__enter__.return_value = resp

        receipt = UrllibFetcher().fetch("https://api.example.com/latest")
        assert receipt.ok
        assert receipt.http_status == 200
        assert receipt.body.startswith(b"{")
        request = mock_urlopen.call_args.args[0]
        assert request.get_header("User-agent").startswith("dust-installer/")

    @patch("dust_installer.adapters.http.urllib_fetcher.urllib.request.urlopen")
    def test_timeout_passed_through(self, mock_urlopen):
        mock_urlopen.return_value.__enter__.return_value = MagicMock(
            read=MagicMock(return_value=b"x"), getcode=MagicMock(return_value=200),
        )
        UrllibFetcher().fetch("https://x", timeout=3)
        assert mock_urlopen.call_args.kwargs["timeout"] == 3

    @patch("dust_installer.adapters.http.urllib_fetcher.urllib.request.urlopen")
    def test_http_error(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.HTTPError(
            "https://x", 403, "rate limit exceeded", {}, None,
        )
        receipt = UrllibFetcher().fetch("https://x")
        assert receipt.failed
        assert receipt.http_status == 403
        assert receipt.error == "HTTP 403: rate limit exceeded"

    @patch("dust_installer.adapters.http.urllib_fetcher.urllib.request.urlopen")
    def test_network_error(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.URLError("Name or service not known")
        receipt = UrllibFetcher().fetch("https://x")
        assert receipt.failed
        assert receipt.error.startswith("Request failed:")

    def test_always_available(self):
        assert UrllibFetcher().is_available()
