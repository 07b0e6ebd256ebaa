"""
identifiers.py - Course id normalization

Turns a short id such as ``guitar::blues`` into the fully qualified
``trane::transcription::guitar::blues`` and the relative directory
``guitar/blues`` where the course lives under courses/.
"""

from pathlib import Path
from typing import Tuple

from transcription_cli.errors import InvalidCourseIdError


COURSE_ID_PREFIX = "trane::transcription::"
ID_SEPARATOR = "::"


def normalize_course_id(raw_id: str) -> Tuple[str, Path]:
    """
    Normalize a course id and derive its directory.

    Segments are not validated; empty segments pass straight through.

    Args:
        raw_id: Id with or without the trane::transcription:: prefix

    Returns:
        (course_id, relative_path) tuple

    Raises:
        InvalidCourseIdError: If raw_id is empty
    """
    if not raw_id:
        raise InvalidCourseIdError(
            message="Course id cannot be empty",
            suggestion="Pass an id such as guitar::blues",
            context={"step": "normalize identifier"},
        )

    if raw_id.startswith(COURSE_ID_PREFIX):
        course_id = raw_id
        remainder = raw_id[len(COURSE_ID_PREFIX):]
    else:
        course_id = COURSE_ID_PREFIX + raw_id
        remainder = raw_id

    return course_id, Path(*remainder.split(ID_SEPARATOR))
