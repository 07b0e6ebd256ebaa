"""
course_tree.py - Walk the library for transcription generator configs
"""

import logging
from typing import Iterator, Tuple

from transcription_cli.course_library import CourseLibrary
from transcription_cli.errors import library_load_error
from transcription_cli.manifest import TranscriptionConfig


logger = logging.getLogger(__name__)


def iter_transcription_configs(library: CourseLibrary) -> Iterator[Tuple[str, TranscriptionConfig]]:
    """
    Yield (course_id, config) for every course generated from transcriptions.

    Courses without a generator config, or with another kind of generator,
    are skipped. Single pass over the library's current state.
    """
    for course_id in sorted(library.get_course_ids()):
        manifest = library.get_course_manifest(course_id)
        # The library listed this id, so it must know the manifest.
        if manifest is None:
            raise library_load_error(f"course library has no manifest for listed course {course_id}")

        config = manifest.generator_config
        if config is None:
            continue
        if not isinstance(config, TranscriptionConfig):
            logger.debug("Skipping %s: generator is not a transcription config", course_id)
            continue
        yield course_id, config
