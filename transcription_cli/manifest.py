#!/usr/bin/env python3
"""
manifest.py - Course manifest model for transcription courses

Records mirror the JSON the Trane library reads from course_manifest.json.
Tagged variants (generator configs, assets, external links) use the
single-key object form:

    "generator_config": {"Transcription": {...}}
    "asset": {"Track": {...}}
    "external_link": {"YouTube": "<video id>"}

Variants this tool does not understand are kept as Unknown* records so they
survive a read/write cycle and are skipped by the link checker.

All records are frozen: a manifest is built once and never mutated. Fields
holding mappings or raw JSON are left out of the hash, so every record,
including a TranscriptionConfig with passages, can be hashed.
"""

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, Optional, Tuple, Union

from transcription_cli.errors import ManifestBuildError, ManifestParseError


DEFAULT_AUTHORS = ("The Trane Project",)
DEFAULT_METADATA = {"course_series": ("trane_transcription",)}


# ============================================================================
# Parsing helpers
# ============================================================================

def _parse_error(message: str, where: str) -> ManifestParseError:
    return ManifestParseError(message=f"{where}: {message}", context={"location": where})


def _tagged(value: Any, where: str) -> Tuple[str, Any]:
    """Split a single-key {"Variant": body} object into (variant, body)."""
    if not isinstance(value, dict) or len(value) != 1:
        raise _parse_error("expected an object with exactly one variant key", where)
    (kind, body), = value.items()
    return kind, body


def _expect(value: Any, types, where: str, what: str):
    if not isinstance(value, types):
        raise _parse_error(f"{what} has the wrong type ({type(value).__name__})", where)
    return value


def _optional_str(data: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return _expect(value, str, where, key)


def _str_list(value: Any, where: str, what: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    _expect(value, list, where, what)
    return tuple(_expect(item, str, where, f"{what} entry") for item in value)


def _bool(data: Dict[str, Any], key: str, where: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise _parse_error(f"{key} must be true or false", where)
    return value


# ============================================================================
# External links
# ============================================================================

@dataclass(frozen=True)
class YouTubeLink:
    """A link to a YouTube video, stored as its video id."""
    KIND: ClassVar[str] = "YouTube"

    video_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {self.KIND: self.video_id}


@dataclass(frozen=True)
class UnknownLink:
    kind: str
    data: Any = field(default=None, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {self.kind: self.data}


ExternalLink = Union[YouTubeLink, UnknownLink]


def link_from_dict(value: Any, where: str = "external_link") -> ExternalLink:
    kind, body = _tagged(value, where)
    if kind == YouTubeLink.KIND:
        return YouTubeLink(video_id=_expect(body, str, where, "YouTube video id"))
    return UnknownLink(kind=kind, data=body)


# ============================================================================
# Assets and passages
# ============================================================================

@dataclass(frozen=True)
class TrackAsset:
    """A recorded track the student transcribes."""
    KIND: ClassVar[str] = "Track"

    short_id: str
    track_name: str = ""
    artist_name: Optional[str] = None
    album_name: Optional[str] = None
    duration: Optional[str] = None
    external_link: Optional[ExternalLink] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            self.KIND: {
                "short_id": self.short_id,
                "track_name": self.track_name,
                "artist_name": self.artist_name,
                "album_name": self.album_name,
                "duration": self.duration,
                "external_link": self.external_link.to_dict() if self.external_link else None,
            }
        }


@dataclass(frozen=True)
class UnknownAsset:
    kind: str
    data: Any = field(default=None, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {self.kind: self.data}


TranscriptionAsset = Union[TrackAsset, UnknownAsset]


def asset_from_dict(value: Any, where: str = "asset") -> TranscriptionAsset:
    kind, body = _tagged(value, where)
    if kind != TrackAsset.KIND:
        return UnknownAsset(kind=kind, data=body)

    _expect(body, dict, where, "Track")
    short_id = body.get("short_id")
    if not isinstance(short_id, str) or not short_id:
        raise _parse_error("Track is missing short_id", where)

    link = body.get("external_link")
    return TrackAsset(
        short_id=short_id,
        track_name=_optional_str(body, "track_name", where) or "",
        artist_name=_optional_str(body, "artist_name", where),
        album_name=_optional_str(body, "album_name", where),
        duration=_optional_str(body, "duration", where),
        external_link=link_from_dict(link, f"{where}.external_link") if link is not None else None,
    )


@dataclass(frozen=True)
class TranscriptionPassages:
    """An asset plus the named intervals of it used as exercises."""
    asset: TranscriptionAsset
    intervals: Dict[str, str] = field(default_factory=dict, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"asset": self.asset.to_dict(), "intervals": dict(self.intervals)}

    @classmethod
    def from_dict(cls, data: Any, where: str = "passage") -> "TranscriptionPassages":
        _expect(data, dict, where, "passage")
        if "asset" not in data:
            raise _parse_error("passage is missing asset", where)

        intervals = data.get("intervals") or {}
        _expect(intervals, dict, where, "intervals")
        for key, description in intervals.items():
            _expect(description, str, where, f"interval {key}")

        return cls(asset=asset_from_dict(data["asset"], f"{where}.asset"), intervals=dict(intervals))


# ============================================================================
# Generator configs
# ============================================================================

@dataclass(frozen=True)
class TranscriptionConfig:
    """Generator config for a transcription course."""
    KIND: ClassVar[str] = "Transcription"

    dependencies: FrozenSet[str] = frozenset()
    passage_directory: str = ""
    inlined_passages: Tuple[TranscriptionPassages, ...] = ()
    skip_singing_lessons: bool = False
    skip_advanced_lessons: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            self.KIND: {
                "transcription_dependencies": sorted(self.dependencies),
                "passage_directory": self.passage_directory,
                "inlined_passages": [p.to_dict() for p in self.inlined_passages],
                "skip_singing_lessons": self.skip_singing_lessons,
                "skip_advanced_lessons": self.skip_advanced_lessons,
            }
        }

    @classmethod
    def from_body(cls, body: Any, where: str) -> "TranscriptionConfig":
        _expect(body, dict, where, "Transcription")
        passages = body.get("inlined_passages") or []
        _expect(passages, list, where, "inlined_passages")
        return cls(
            dependencies=frozenset(_str_list(
                body.get("transcription_dependencies"), where, "transcription_dependencies"
            )),
            passage_directory=_optional_str(body, "passage_directory", where) or "",
            inlined_passages=tuple(
                TranscriptionPassages.from_dict(p, f"{where}.inlined_passages[{i}]")
                for i, p in enumerate(passages)
            ),
            skip_singing_lessons=_bool(body, "skip_singing_lessons", where),
            skip_advanced_lessons=_bool(body, "skip_advanced_lessons", where),
        )


@dataclass(frozen=True)
class UnknownGenerator:
    kind: str
    data: Any = field(default=None, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {self.kind: self.data}


CourseGenerator = Union[TranscriptionConfig, UnknownGenerator]


def generator_from_dict(value: Any, where: str = "generator_config") -> CourseGenerator:
    kind, body = _tagged(value, where)
    if kind == TranscriptionConfig.KIND:
        return TranscriptionConfig.from_body(body, f"{where}.{kind}")
    return UnknownGenerator(kind=kind, data=body)


# ============================================================================
# Course manifest
# ============================================================================

@dataclass(frozen=True)
class CourseManifest:
    id: str
    name: str = ""
    dependencies: Tuple[str, ...] = ()
    superseded: Tuple[str, ...] = ()
    description: Optional[str] = None
    authors: Tuple[str, ...] = ()
    metadata: Dict[str, Tuple[str, ...]] = field(default_factory=dict, hash=False)
    course_material: Any = field(default=None, hash=False)
    course_instructions: Any = field(default=None, hash=False)
    generator_config: Optional[CourseGenerator] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-ready dict, keys in declaration order."""
        return {
            "id": self.id,
            "name": self.name,
            "dependencies": list(self.dependencies),
            "superseded": list(self.superseded),
            "description": self.description,
            "authors": list(self.authors),
            "metadata": {key: list(values) for key, values in self.metadata.items()},
            "course_material": self.course_material,
            "course_instructions": self.course_instructions,
            "generator_config": self.generator_config.to_dict() if self.generator_config else None,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4, ensure_ascii=False) + "\n"

    @classmethod
    def from_dict(cls, data: Any, where: str = "course_manifest") -> "CourseManifest":
        _expect(data, dict, where, "course manifest")

        course_id = data.get("id")
        if not isinstance(course_id, str) or not course_id:
            raise _parse_error("manifest is missing id", where)

        metadata = data.get("metadata") or {}
        _expect(metadata, dict, where, "metadata")

        generator = data.get("generator_config")
        return cls(
            id=course_id,
            name=_optional_str(data, "name", where) or "",
            dependencies=_str_list(data.get("dependencies"), where, "dependencies"),
            superseded=_str_list(data.get("superseded"), where, "superseded"),
            description=_optional_str(data, "description", where),
            authors=_str_list(data.get("authors"), where, "authors"),
            metadata={
                key: _str_list(values, where, f"metadata.{key}")
                for key, values in metadata.items()
            },
            course_material=data.get("course_material"),
            course_instructions=data.get("course_instructions"),
            generator_config=(
                generator_from_dict(generator, f"{where}.generator_config")
                if generator is not None else None
            ),
        )


class CourseManifestBuilder:
    """
    Fluent builder for CourseManifest.

    build() fails with ManifestBuildError when a required field is unset.
    """

    REQUIRED_FIELDS = ("id",)

    def __init__(self):
        self._fields: Dict[str, Any] = {}

    def id(self, value: str) -> "CourseManifestBuilder":
        self._fields["id"] = value
        return self

    def authors(self, value: Iterable[str]) -> "CourseManifestBuilder":
        self._fields["authors"] = tuple(value)
        return self

    def metadata(self, value: Dict[str, Iterable[str]]) -> "CourseManifestBuilder":
        self._fields["metadata"] = {key: tuple(values) for key, values in value.items()}
        return self

    def generator_config(self, value: Optional[CourseGenerator]) -> "CourseManifestBuilder":
        self._fields["generator_config"] = value
        return self

    def build(self) -> CourseManifest:
        missing = [name for name in self.REQUIRED_FIELDS if not self._fields.get(name)]
        if missing:
            raise ManifestBuildError(
                message="failed to build course manifest",
                suggestion=f"Set the required field(s): {', '.join(missing)}",
                context={"missing_fields": missing, "step": "build manifest"},
            )
        return CourseManifest(**self._fields)


def build_transcription_manifest(course_id: str) -> CourseManifest:
    """
    Build the manifest for a freshly scaffolded transcription course.

    Args:
        course_id: Fully qualified course id

    Returns:
        CourseManifest with default authors, metadata and an empty
        TranscriptionConfig
    """
    return (
        CourseManifestBuilder()
        .id(course_id)
        .authors(DEFAULT_AUTHORS)
        .metadata(DEFAULT_METADATA)
        .generator_config(TranscriptionConfig())
        .build()
    )
