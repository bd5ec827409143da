"""
Feature catalog: default metadata for known feature kinds.

A FeatureCatalog is an immutable mapping injected into whoever needs it
(planner, detectors), so separate runs can use separate catalogs.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from phaseguard.domain.models import Complexity, Feature


@dataclass(frozen=True)
class FeatureTemplate:
    """Defaults for one feature kind."""

    name: str
    description: str = ""
    dependencies: tuple[str, ...] = ()
    estimated_work_units: int = 3
    complexity: Complexity = Complexity.MEDIUM
    priority: int = 99
    required_external_apis: tuple[str, ...] | None = None
    data_entities: tuple[str, ...] | None = None


class FeatureCatalog(Mapping[str, FeatureTemplate]):
    """Read-only mapping of feature kind -> FeatureTemplate."""

    def __init__(self, templates: Mapping[str, FeatureTemplate]):
        self._templates = MappingProxyType(dict(templates))

    def __getitem__(self, kind: str) -> FeatureTemplate:
        return self._templates[kind]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def create_feature(self, kind: str) -> Feature:
        """
        Build a Feature for a kind, falling back to generic defaults.

        Unknown kinds get a medium-complexity, dependency-free feature
        with the lowest priority.
        """
        template = self._templates.get(kind)
        if template is None:
            return Feature(
                id=kind,
                name=kind,
                description=f"{kind} functionality",
            )
        return Feature(
            id=kind,
            name=template.name,
            description=template.description,
            dependencies=template.dependencies,
            estimated_work_units=template.estimated_work_units,
            complexity=template.complexity,
            priority=template.priority,
            required_external_apis=template.required_external_apis,
            data_entities=template.data_entities,
        )

    def with_templates(self, **templates: FeatureTemplate) -> FeatureCatalog:
        """Return a new catalog with templates added or replaced."""
        return FeatureCatalog({**self._templates, **templates})


DEFAULT_FEATURE_CATALOG = FeatureCatalog(
    {
        "database": FeatureTemplate(
            name="Database Schema",
            description="Core database tables and relationships",
            estimated_work_units=1,
            priority=1,
        ),
        "authentication": FeatureTemplate(
            name="Authentication",
            description="User signup, login, and session management",
            dependencies=("database",),
            estimated_work_units=5,
            priority=2,
        ),
        "userProfiles": FeatureTemplate(
            name="User Profiles",
            description="User profile management and display",
            dependencies=("authentication", "database"),
            estimated_work_units=4,
            complexity=Complexity.LOW,
            priority=3,
        ),
        "videoUpload": FeatureTemplate(
            name="Video Upload",
            description="Video file upload and storage",
            dependencies=("authentication", "database"),
            estimated_work_units=6,
            complexity=Complexity.HIGH,
            priority=4,
            required_external_apis=("Cloudinary", "AWS S3"),
            data_entities=("videos", "video_metadata"),
        ),
        "videoProcessing": FeatureTemplate(
            name="Video Processing",
            description="Video transcoding and optimization",
            dependencies=("videoUpload",),
            estimated_work_units=4,
            complexity=Complexity.HIGH,
            priority=5,
            required_external_apis=("Cloudinary", "Mux"),
        ),
        "feed": FeatureTemplate(
            name="Content Feed",
            description="Main content feed with infinite scroll",
            dependencies=("authentication", "videoUpload", "database"),
            estimated_work_units=8,
            complexity=Complexity.HIGH,
            priority=6,
            data_entities=("feed_items", "user_interactions"),
        ),
        "comments": FeatureTemplate(
            name="Comments System",
            description="Commenting and replies",
            dependencies=("authentication", "feed"),
            estimated_work_units=5,
            priority=7,
            data_entities=("comments", "comment_replies"),
        ),
        "likes": FeatureTemplate(
            name="Likes & Reactions",
            description="Like and reaction system",
            dependencies=("authentication", "feed"),
            estimated_work_units=3,
            complexity=Complexity.LOW,
            priority=7,
            data_entities=("likes", "reactions"),
        ),
        "search": FeatureTemplate(
            name="Search",
            description="Content and user search",
            dependencies=("database", "feed"),
            estimated_work_units=6,
            priority=8,
        ),
        "notifications": FeatureTemplate(
            name="Notifications",
            description="Real-time notifications",
            dependencies=("authentication",),
            estimated_work_units=5,
            priority=9,
            data_entities=("notifications",),
        ),
        "messaging": FeatureTemplate(
            name="Messaging",
            description="Direct messaging between users",
            dependencies=("authentication",),
            estimated_work_units=7,
            complexity=Complexity.HIGH,
            priority=10,
            data_entities=("messages", "conversations"),
        ),
        "payments": FeatureTemplate(
            name="Payments",
            description="Payment processing and billing",
            dependencies=("authentication",),
            estimated_work_units=8,
            complexity=Complexity.HIGH,
            priority=11,
            required_external_apis=("Stripe",),
            data_entities=("payments", "subscriptions"),
        ),
        "analytics": FeatureTemplate(
            name="Analytics",
            description="Usage tracking and insights",
            dependencies=("database",),
            estimated_work_units=5,
            priority=12,
            data_entities=("analytics_events",),
        ),
    }
)
