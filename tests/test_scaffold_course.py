# tests/test_scaffold_course.py
"""
Tests for scaffold_course.py - creating new transcription courses
"""
import json
from pathlib import Path

import pytest

from transcription_cli.config_utils import get_config
from transcription_cli.course_library import LocalCourseLibrary
from transcription_cli.errors import (
    CourseAlreadyExistsError,
    FileWriteError,
    InvalidCourseIdError,
    MissingCoursesRootError,
)
from transcription_cli.manifest import build_transcription_manifest
from transcription_cli.scaffold_course import create_course


class TestCreateCourse:
    """Tests for create_course"""

    def test_creates_manifest(self, workspace):
        """Manifest lands at courses/<path>/course_manifest.json"""
        manifest_path = create_course("guitar::blues")

        assert manifest_path == workspace / "courses" / "guitar" / "blues" / "course_manifest.json"
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
        assert data["id"] == "trane::transcription::guitar::blues"
        assert data["authors"] == ["The Trane Project"]
        assert data["metadata"] == {"course_series": ["trane_transcription"]}
        assert data["generator_config"]["Transcription"]["skip_singing_lessons"] is False

    def test_prefixed_id(self, workspace):
        manifest_path = create_course("trane::transcription::piano::jazz")

        assert manifest_path.parent == workspace / "courses" / "piano" / "jazz"
        assert json.loads(manifest_path.read_text())["id"] == "trane::transcription::piano::jazz"

    def test_four_space_indent(self, workspace):
        text = create_course("a").read_text(encoding="utf-8")

        assert text.startswith('{\n    "id": ')

    def test_second_call_fails(self, workspace):
        """Scaffolding the same id twice fails the second time"""
        create_course("a::b")

        with pytest.raises(CourseAlreadyExistsError) as exc_info:
            create_course("a::b")

        assert exc_info.value.context["step"] == "check target directory"

    def test_same_course_with_and_without_prefix(self, workspace):
        create_course("a::b")

        with pytest.raises(CourseAlreadyExistsError):
            create_course("trane::transcription::a::b")

    def test_missing_courses_root(self, tmp_path, monkeypatch):
        """No courses/ directory means no writes at all"""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(MissingCoursesRootError):
            create_course("a::b")

        assert list(tmp_path.iterdir()) == []

    def test_courses_root_is_a_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "courses").write_text("not a directory")

        with pytest.raises(MissingCoursesRootError):
            create_course("a::b")

    def test_explicit_cwd(self, tmp_path):
        (tmp_path / "courses").mkdir()

        manifest_path = create_course("x", cwd=tmp_path)

        assert manifest_path == tmp_path / "courses" / "x" / "course_manifest.json"

    def test_config_working_dir_wins_over_process_cwd(self, tmp_path, monkeypatch):
        """A config loaded for another directory scaffolds there"""
        elsewhere = tmp_path / "elsewhere"
        (elsewhere / "courses").mkdir(parents=True)
        monkeypatch.chdir(tmp_path)

        manifest_path = create_course("x", config=get_config(elsewhere))

        assert manifest_path == elsewhere / "courses" / "x" / "course_manifest.json"
        assert not (tmp_path / "courses").exists()

    def test_courses_dir_from_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TRANSCRIPTION_COURSES_DIR", "library")
        (tmp_path / "library").mkdir()

        manifest_path = create_course("x")

        assert manifest_path == tmp_path / "library" / "x" / "course_manifest.json"

    def test_rejects_path_escaping_root(self, workspace):
        with pytest.raises(InvalidCourseIdError):
            create_course("..::..::outside")

        assert not (workspace.parent / "outside").exists()

    def test_write_failure_leaves_directory(self, workspace, mocker):
        """No rollback: the created directory stays when the write fails"""
        mocker.patch.object(Path, "write_text", side_effect=OSError("disk full"))

        with pytest.raises(FileWriteError) as exc_info:
            create_course("a::b")

        assert exc_info.value.context["step"] == "write manifest"
        assert (workspace / "courses" / "a" / "b").is_dir()
        assert not (workspace / "courses" / "a" / "b" / "course_manifest.json").exists()

    def test_round_trip_through_library(self, workspace):
        """The library reads back the same generator config that was built"""
        create_course("a::b")

        library = LocalCourseLibrary.new_local(workspace, workspace)
        manifest = library.get_course_manifest("trane::transcription::a::b")

        expected = build_transcription_manifest("trane::transcription::a::b")
        assert manifest.generator_config == expected.generator_config
        assert manifest == expected
