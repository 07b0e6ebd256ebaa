#!/usr/bin/env python3
"""
course_library.py - Read-only access to a tree of Trane courses

CourseLibrary is the boundary this tool talks to. Scheduling, dependency
resolution and user data are the library's business and are not modelled
here.

LocalCourseLibrary is the filesystem implementation used by the CLI:

- Every course_manifest.json under the library root is one course
  (hidden directories such as .git or .trane are skipped)
- Manifests must parse and course ids must be unique
- Transcription courses with a passage_directory must point at an existing
  directory whose *.json files are valid passages
- Each exercise_manifest.json in the tree, and each passage of a
  transcription course, counts as one exercise

The user data root is recorded but never written to.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from transcription_cli.errors import ManifestParseError, library_load_error
from transcription_cli.manifest import CourseManifest, TranscriptionConfig, TranscriptionPassages


logger = logging.getLogger(__name__)

COURSE_MANIFEST = "course_manifest.json"
EXERCISE_MANIFEST = "exercise_manifest.json"


class CourseLibrary(ABC):
    """Read API of a course library"""

    @classmethod
    @abstractmethod
    def new_local(cls, library_root: Path, user_data_root: Path) -> "CourseLibrary":
        """Open the library, raising LibraryLoadError if the tree is invalid"""

    @abstractmethod
    def get_course_ids(self) -> List[str]:
        """All known course ids"""

    @abstractmethod
    def get_course_manifest(self, course_id: str) -> Optional[CourseManifest]:
        """Manifest for course_id, or None if unknown"""

    @abstractmethod
    def exercise_count(self) -> int:
        """Total number of exercises across all courses"""


def _load_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise library_load_error(f"Cannot read {path.name}", path=path, cause=e)


def _iter_files(root: Path, filename: str):
    """Yield every file called filename under root, skipping hidden dirs."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        if filename in filenames:
            yield Path(dirpath) / filename


class LocalCourseLibrary(CourseLibrary):
    """Course library backed by a directory of course manifests"""

    def __init__(self, library_root: Path, user_data_root: Path):
        self.library_root = Path(library_root)
        self.user_data_root = Path(user_data_root)
        self._manifests: Dict[str, CourseManifest] = {}
        self._course_dirs: Dict[str, Path] = {}
        self._exercise_count = 0

    @classmethod
    def new_local(cls, library_root: Path, user_data_root: Path) -> "LocalCourseLibrary":
        library = cls(library_root, user_data_root)
        library._load()
        return library

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load(self) -> None:
        if not self.library_root.is_dir():
            raise library_load_error(
                f"Library root is not a directory: {self.library_root}",
                path=self.library_root,
            )

        for manifest_path in _iter_files(self.library_root, COURSE_MANIFEST):
            self._add_course(manifest_path)
        self._exercise_count += sum(1 for _ in _iter_files(self.library_root, EXERCISE_MANIFEST))

        logger.info("Loaded %d course(s) from %s", len(self._manifests), self.library_root)

    def _add_course(self, manifest_path: Path) -> None:
        try:
            manifest = CourseManifest.from_dict(_load_json(manifest_path), where=str(manifest_path))
        except ManifestParseError as e:
            raise library_load_error(f"Invalid course manifest {manifest_path}", path=manifest_path, cause=e)

        if manifest.id in self._manifests:
            other = self._course_dirs[manifest.id] / COURSE_MANIFEST
            raise library_load_error(
                f"Duplicate course id {manifest.id} in {manifest_path} and {other}",
                path=manifest_path,
            )

        course_dir = manifest_path.parent
        self._manifests[manifest.id] = manifest
        self._course_dirs[manifest.id] = course_dir
        if isinstance(manifest.generator_config, TranscriptionConfig):
            self._exercise_count += self._count_passages(course_dir, manifest.generator_config)

        logger.debug("Found course %s at %s", manifest.id, course_dir)

    def _count_passages(self, course_dir: Path, config: TranscriptionConfig) -> int:
        count = len(config.inlined_passages)
        if not config.passage_directory:
            return count

        passage_dir = course_dir / config.passage_directory
        if not passage_dir.is_dir():
            raise library_load_error(
                f"Passage directory does not exist: {passage_dir}",
                path=passage_dir,
            )

        for passage_path in sorted(passage_dir.glob("*.json")):
            try:
                TranscriptionPassages.from_dict(_load_json(passage_path), where=str(passage_path))
            except ManifestParseError as e:
                raise library_load_error(f"Invalid passage file {passage_path}", path=passage_path, cause=e)
            count += 1
        return count

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    def get_course_ids(self) -> List[str]:
        return sorted(self._manifests)

    def get_course_manifest(self, course_id: str) -> Optional[CourseManifest]:
        return self._manifests.get(course_id)

    def exercise_count(self) -> int:
        return self._exercise_count
