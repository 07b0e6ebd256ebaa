"""
verify_courses.py - Check that the local course tree loads
"""

import logging
from pathlib import Path
from typing import Optional

from transcription_cli.course_library import LocalCourseLibrary


logger = logging.getLogger(__name__)


def verify_courses(library_root: Optional[Path] = None, user_data_root: Optional[Path] = None) -> LocalCourseLibrary:
    """
    Load every course under library_root.

    Both roots default to the working directory.

    Raises:
        LibraryLoadError: If any course in the tree is structurally invalid
    """
    library_root = Path(library_root) if library_root else Path.cwd()
    user_data_root = Path(user_data_root) if user_data_root else library_root

    library = LocalCourseLibrary.new_local(library_root, user_data_root)
    logger.info(
        "%d course(s), %d exercise(s)",
        len(library.get_course_ids()),
        library.exercise_count(),
    )
    return library
