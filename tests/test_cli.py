"""
Tests for the command-line interface.

The CLI talks to a real application instance through httpx's ASGI transport,
so no server process is needed.
"""

import httpx
from typer.testing import CliRunner

from moodmelody import cli
from moodmelody.server import build_app
from moodmelody.store import InMemoryKeyValueStore

runner = CliRunner()


class TestCLI:
    """Test suite for the CLI commands."""

    def setup_method(self):
        """Point the CLI at an in-process app for each test."""
        self.app = build_app(InMemoryKeyValueStore())

    def _use_app(self, monkeypatch):
        def make_client(base_url: str) -> httpx.AsyncClient:
            return httpx.AsyncClient(
                transport=httpx.ASGITransport(app=self.app),
                base_url="http://testserver",
            )

        monkeypatch.setattr(cli, "_make_client", make_client)

    def test_infer(self, monkeypatch):
        self._use_app(monkeypatch)

        result = runner.invoke(cli.app, ["infer", "I feel so happy"])
        assert result.exit_code == 0
        assert "😊 Happy" in result.output
        assert "Search: happy upbeat mood music" in result.output

    def test_infer_fusion(self, monkeypatch):
        self._use_app(monkeypatch)

        result = runner.invoke(cli.app, ["infer", "calm but energetic"])
        assert result.exit_code == 0
        assert "Calm + Energetic (moderate)" in result.output

    def test_tracks_like_and_clear(self, monkeypatch):
        """Test listing tracks, liking one and clearing the cache."""
        self._use_app(monkeypatch)

        listed = runner.invoke(cli.app, ["tracks", "sad", "--limit", "2"])
        assert listed.exit_code == 0
        assert "sad-offline-0  Someone Like You - Adele" in listed.output

        liked = runner.invoke(cli.app, ["like", "sad", "sad-offline-0"])
        assert liked.exit_code == 0
        assert "Liked: sad-offline-0" in liked.output

        relisted = runner.invoke(cli.app, ["tracks", "sad"])
        assert "♥ sad-offline-0" in relisted.output

        cleared = runner.invoke(cli.app, ["clear", "sad"])
        assert cleared.exit_code == 0
        assert "Cleared cache for: sad" in cleared.output

    def test_http_error_exits_with_failure(self, monkeypatch):
        self._use_app(monkeypatch)

        result = runner.invoke(cli.app, ["tracks", "happy", "--intensity", "loud"])
        assert result.exit_code == 1
        assert "Error: HTTP 422" in result.output

    def test_connection_error(self):
        result = runner.invoke(
            cli.app, ["infer", "happy", "--url", "http://127.0.0.1:9"]
        )
        assert result.exit_code == 1
        assert "Error: Could not connect to http://127.0.0.1:9" in result.output


class TestFormatting:
    def test_format_inference_with_intensity(self):
        text = cli._format_inference(
            {
                "mood": {"type": "custom", "text": "lofi music"},
                "intensity": "chill",
                "fusion": None,
                "search_term": "chill lofi music",
            }
        )
        assert text == "🎵 lofi music (chill)\nSearch: chill lofi music"
