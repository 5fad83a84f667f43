"""
Command-line interface tools for the MoodMelody service.
"""

import asyncio
import json
from collections.abc import Coroutine
from typing import Any
from urllib.parse import quote

import httpx
import typer
from pydantic import TypeAdapter

from .config import DEFAULT_BASE_URL
from .models import Mood, MoodFusion, Track
from .presentation import display_name, glyph

app = typer.Typer(help="MoodMelody CLI tools")

_mood_adapter = TypeAdapter(Mood)


# MARK: - Commands


@app.command()
def infer(
    text: str = typer.Argument(..., help="How you feel, in your own words"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MoodMelody service"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Infer the mood of a sentence."""

    async def _infer() -> None:
        async with _make_client(base_url) as client:
            response = await client.post("/mood/infer", json={"text": text})
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2))
                return

            print(_format_inference(result))

    _run_with_error_handling(_infer(), base_url)


@app.command()
def tracks(
    mood: str = typer.Argument(..., help="Mood name, e.g. happy or custom:jazz music"),
    intensity: str | None = typer.Option(
        None, "--intensity", "-i", help="Intensity modifier, e.g. chill"
    ),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum tracks"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MoodMelody service"
    ),
) -> None:
    """List tracks for a mood."""

    async def _tracks() -> None:
        params: dict[str, Any] = {}
        if intensity:
            params["intensity"] = intensity
        if limit:
            params["limit"] = limit

        async with _make_client(base_url) as client:
            response = await client.get(f"/moods/{_path(mood)}/tracks", params=params)
            response.raise_for_status()
            result = response.json()

            items = [Track.model_validate(item) for item in result["tracks"]]
            if not items:
                print("No tracks found")
                return
            for track in items:
                print(_format_track(track))

    _run_with_error_handling(_tracks(), base_url)


@app.command()
def like(
    mood: str = typer.Argument(..., help="Mood the track was found for"),
    track_id: str = typer.Argument(..., help="Identifier of the track"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MoodMelody service"
    ),
) -> None:
    """Toggle the liked state of a track."""

    async def _like() -> None:
        async with _make_client(base_url) as client:
            response = await client.post(
                f"/moods/{_path(mood)}/likes/{_path(track_id)}"
            )
            response.raise_for_status()
            result = response.json()
            state = "Liked" if result["liked"] else "Unliked"
            print(f"{state}: {result['track_id']}")

    _run_with_error_handling(_like(), base_url)


@app.command()
def clear(
    mood: str = typer.Argument(..., help="Mood whose cached tracks to drop"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the MoodMelody service"
    ),
) -> None:
    """Clear the cached tracks for a mood."""

    async def _clear() -> None:
        async with _make_client(base_url) as client:
            response = await client.delete(f"/moods/{_path(mood)}/cache")
            response.raise_for_status()
            print(f"Cleared cache for: {response.json()['mood']}")

    _run_with_error_handling(_clear(), base_url)


# MARK: - Private Helpers


def _make_client(base_url: str) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url)


def _path(value: str) -> str:
    return quote(value, safe="")


def _format_inference(result: dict[str, Any]) -> str:
    """Format an inference result as a short human-readable summary."""
    if result.get("fusion"):
        fusion = MoodFusion.model_validate(result["fusion"])
        label = f"{glyph(fusion)} {display_name(fusion)} ({fusion.intensity.value})"
    else:
        mood = _mood_adapter.validate_python(result["mood"])
        label = f"{glyph(mood)} {display_name(mood)}"
        if result.get("intensity"):
            label += f" ({result['intensity']})"

    return f"{label}\nSearch: {result['search_term']}"


def _format_track(track: Track) -> str:
    heart = "♥" if track.is_liked else " "
    return f"{heart} {track.id}  {track.title} - {track.artist}"


def _run_with_error_handling(coro: Coroutine[Any, Any, Any], base_url: str) -> None:
    """Run an async coroutine with standardized error handling."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        print(f"Error: HTTP {e.response.status_code}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
