"""
Custom exception classes for transcription-cli

All exceptions include:
- Clear error description
- Actionable suggestions
- Relevant context (which path, which step)
"""
from pathlib import Path
from typing import Optional, Dict, Any


class TranscriptionCliError(Exception):
    """Base exception for all transcription-cli errors"""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        self.cause = cause
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error with all details"""
        lines = [
            "",
            "=" * 70,
            f"{self.__class__.__name__}",
            "=" * 70,
            "",
            self.message,
        ]

        if self.context:
            lines.append("")
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestion:
            lines.append("")
            lines.append("Suggestion:")
            lines.append(f"  {self.suggestion}")

        if self.cause:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        lines.append("")
        lines.append("=" * 70)
        lines.append("")

        return "\n".join(lines)


class ConfigurationError(TranscriptionCliError):
    """Configuration is missing or invalid"""
    pass


class ScaffoldError(TranscriptionCliError):
    """A step of course scaffolding failed"""
    pass


class MissingCoursesRootError(ScaffoldError):
    """The courses/ directory does not exist in the working directory"""
    pass


class CourseAlreadyExistsError(ScaffoldError):
    """The target course directory already exists"""
    pass


class InvalidCourseIdError(ScaffoldError):
    """The course id is empty or escapes the courses directory"""
    pass


class ManifestBuildError(ScaffoldError):
    """A required manifest field was left unset"""
    pass


class DirectoryCreateError(ScaffoldError):
    """The course directory could not be created"""
    pass


class SerializationError(ScaffoldError):
    """The manifest could not be serialized to JSON"""
    pass


class FileWriteError(ScaffoldError):
    """The manifest file could not be written"""
    pass


class ManifestParseError(TranscriptionCliError):
    """A course manifest document is structurally invalid"""
    pass


class LibraryLoadError(TranscriptionCliError):
    """The course library rejected the course tree"""
    pass


class LinkInvalidError(TranscriptionCliError):
    """An external media link could not be confirmed"""
    pass


# Specific error factory functions

def missing_courses_root_error(root: Path) -> MissingCoursesRootError:
    """Create error for a missing courses/ directory"""
    return MissingCoursesRootError(
        message=f"courses directory does not exist at {root}",
        suggestion=(
            "Run this command from the root of the courses repository, or create it:\n"
            f"  mkdir {root}"
        ),
        context={
            "expected_path": str(root),
            "step": "resolve courses root",
        }
    )


def course_already_exists_error(directory: Path, course_id: str) -> CourseAlreadyExistsError:
    """Create error when the course directory is already on disk"""
    return CourseAlreadyExistsError(
        message=f"course already exists at {directory}",
        suggestion="Pick a different id, or edit the existing course_manifest.json",
        context={
            "course_id": course_id,
            "directory": str(directory),
            "step": "check target directory",
        }
    )


def course_id_outside_root_error(raw_id: str, directory: Path, root: Path) -> InvalidCourseIdError:
    """Create error when an id would place the course outside courses/"""
    return InvalidCourseIdError(
        message=f"course id '{raw_id}' resolves outside the courses directory",
        suggestion="Remove '..' and absolute segments from the id",
        context={
            "course_id": raw_id,
            "directory": str(directory),
            "courses_root": str(root),
            "step": "normalize identifier",
        }
    )


def library_load_error(
    message: str,
    path: Optional[Path] = None,
    cause: Optional[Exception] = None
) -> LibraryLoadError:
    """Create error for a course tree the library cannot load"""
    context: Dict[str, Any] = {}
    if path is not None:
        context["path"] = str(path)
    return LibraryLoadError(
        message=message,
        suggestion="Fix the file listed above and run verify-courses again",
        context=context,
        cause=cause
    )


def link_invalid_error(
    video_id: str,
    url: str,
    status_code: Optional[int] = None,
    cause: Optional[Exception] = None
) -> LinkInvalidError:
    """Create error for a link the remote service did not confirm"""
    context: Dict[str, Any] = {"video_id": video_id, "url": url}
    if status_code is not None:
        context["status_code"] = status_code
    return LinkInvalidError(
        message=f"Video '{video_id}' could not be confirmed",
        suggestion="Check that the video is still public, or replace the link",
        context=context,
        cause=cause
    )
