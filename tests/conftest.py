# tests/conftest.py
"""
Pytest configuration and shared fixtures for transcription-cli tests
"""
import json
from pathlib import Path
from typing import Callable, Optional

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep user config and environment overrides out of every test"""
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))
    for var in ("TRANSCRIPTION_COURSES_DIR", "TRANSCRIPTION_LINK_WORKERS", "TRANSCRIPTION_LINK_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def workspace(tmp_path, monkeypatch) -> Path:
    """A working directory with an empty courses/ root, made current"""
    (tmp_path / "courses").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


def track_passage(short_id: str, video_id: Optional[str] = None) -> dict:
    """Passage JSON for a Track, optionally linked to a YouTube video"""
    track = {
        "short_id": short_id,
        "track_name": f"Track {short_id}",
        "artist_name": "Artist",
        "album_name": None,
        "duration": "3:30",
        "external_link": {"YouTube": video_id} if video_id else None,
    }
    return {"asset": {"Track": track}, "intervals": {"1": "0:00-0:30"}}


def transcription_config(passages=(), passage_directory: str = "") -> dict:
    """generator_config JSON for a transcription course"""
    return {
        "Transcription": {
            "transcription_dependencies": [],
            "passage_directory": passage_directory,
            "inlined_passages": list(passages),
            "skip_singing_lessons": False,
            "skip_advanced_lessons": False,
        }
    }


@pytest.fixture
def write_course() -> Callable[..., Path]:
    """Write a course_manifest.json and return its directory"""
    def _write(root: Path, relative: str, course_id: str, generator_config: Optional[dict] = None) -> Path:
        course_dir = root / relative
        course_dir.mkdir(parents=True, exist_ok=True)
        manifest = {
            "id": course_id,
            "name": course_id.rsplit("::", 1)[-1],
            "dependencies": [],
            "authors": ["The Trane Project"],
            "metadata": {"course_series": ["trane_transcription"]},
            "generator_config": generator_config,
        }
        (course_dir / "course_manifest.json").write_text(json.dumps(manifest, indent=4), encoding="utf-8")
        return course_dir
    return _write
