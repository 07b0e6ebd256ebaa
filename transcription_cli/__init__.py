"""
transcription-cli - Utilities for Trane transcription courses

Scaffolds new transcription courses, checks that the local course tree
loads, and checks that the YouTube links referenced by course passages
still resolve.
"""

__version__ = "1.0.0"
__author__ = "The Trane Project"
__license__ = "MIT"

from transcription_cli.errors import TranscriptionCliError, ScaffoldError, LibraryLoadError, LinkInvalidError

__all__ = [
    "__version__",
    "TranscriptionCliError",
    "ScaffoldError",
    "LibraryLoadError",
    "LinkInvalidError",
]
