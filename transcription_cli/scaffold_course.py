#!/usr/bin/env python3

"""
scaffold_course.py (transcription-cli)

Create a new transcription course under courses/ in the working directory.

- Normalizes the id (adds the trane::transcription:: prefix when missing)
- Refuses to touch a course directory that already exists
- Creates the course directory, including missing namespace directories
- Writes course_manifest.json with default authors, metadata and an empty
  transcription generator config

A failure after the directory is created leaves the empty directory behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from transcription_cli.config_utils import ToolConfig, get_config
from transcription_cli.errors import (
    DirectoryCreateError,
    FileWriteError,
    SerializationError,
    course_already_exists_error,
    course_id_outside_root_error,
    missing_courses_root_error,
)
from transcription_cli.identifiers import normalize_course_id
from transcription_cli.manifest import build_transcription_manifest


logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "course_manifest.json"


def is_safe_path(base_dir: Path, target_path: Path) -> bool:
    """Check that target_path stays inside base_dir once resolved."""
    try:
        target_path.resolve().relative_to(base_dir.resolve())
        return True
    except ValueError:
        return False


def create_course(
    raw_id: str,
    cwd: Optional[Path] = None,
    config: Optional[ToolConfig] = None,
) -> Path:
    """
    Scaffold a new transcription course.

    Args:
        raw_id: Course id, with or without the trane::transcription:: prefix
        cwd: Directory to load the configuration from when config is not given
        config: Loaded configuration; courses/ is resolved against its working_dir

    Returns:
        Path to the written course_manifest.json

    Raises:
        ConfigurationError: The configuration could not be loaded
        ScaffoldError: The first step that failed, with path and step in context
    """
    if config is None:
        config = get_config(cwd, include_links=False)

    root = config.courses_root
    if not root.is_dir():
        raise missing_courses_root_error(root)

    course_id, relative_path = normalize_course_id(raw_id)
    directory = root / relative_path
    if not is_safe_path(root, directory):
        raise course_id_outside_root_error(raw_id, directory, root)
    if directory.exists():
        raise course_already_exists_error(directory, course_id)

    manifest = build_transcription_manifest(course_id)

    try:
        directory.mkdir(parents=True)
    except OSError as e:
        raise DirectoryCreateError(
            message=f"failed to create course directory {directory}",
            context={"directory": str(directory), "step": "create directory"},
            cause=e,
        )
    logger.info("Created directory %s", directory)

    try:
        pretty_json = manifest.to_json()
    except (TypeError, ValueError) as e:
        raise SerializationError(
            message="invalid course manifest",
            context={"course_id": course_id, "step": "serialize manifest"},
            cause=e,
        )

    manifest_path = directory / MANIFEST_FILENAME
    try:
        manifest_path.write_text(pretty_json, encoding="utf-8")
    except OSError as e:
        raise FileWriteError(
            message=f"failed to write manifest to {manifest_path}",
            suggestion=f"The empty directory {directory} was left in place; remove it before retrying",
            context={"path": str(manifest_path), "step": "write manifest"},
            cause=e,
        )
    logger.info("Wrote %s", manifest_path)

    return manifest_path
