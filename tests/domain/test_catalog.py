"""Tests for FeatureCatalog and path classification."""

import pytest

from phaseguard.domain.catalog import (
    DEFAULT_FEATURE_CATALOG,
    FeatureCatalog,
    FeatureTemplate,
)
from phaseguard.domain.classification import classify_artifact, classify_path
from phaseguard.domain.models import ArtifactKind, ArtifactSpec, Complexity


class TestFeatureCatalog:
    """Tests for catalog lookup and feature creation."""

    def test_known_kind(self):
        feature = DEFAULT_FEATURE_CATALOG.create_feature("authentication")

        assert feature.id == "authentication"
        assert feature.name == "Authentication"
        assert feature.dependencies == ("database",)
        assert feature.estimated_work_units == 5

    def test_unknown_kind_gets_generic_defaults(self):
        feature = DEFAULT_FEATURE_CATALOG.create_feature("quantumSync")

        assert feature.name == "quantumSync"
        assert feature.description == "quantumSync functionality"
        assert feature.dependencies == ()
        assert feature.complexity == Complexity.MEDIUM
        assert feature.estimated_work_units == 3
        assert feature.priority == 99

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_FEATURE_CATALOG["x"] = FeatureTemplate(name="X")  # type: ignore[index]

    def test_with_templates_returns_new_catalog(self):
        extended = DEFAULT_FEATURE_CATALOG.with_templates(
            stories=FeatureTemplate(name="Stories", dependencies=("feed",))
        )

        assert "stories" in extended
        assert "stories" not in DEFAULT_FEATURE_CATALOG
        assert len(extended) == len(DEFAULT_FEATURE_CATALOG) + 1

    def test_separate_catalogs_are_independent(self):
        catalog = FeatureCatalog({"a": FeatureTemplate(name="A")})

        assert list(catalog) == ["a"]
        assert catalog.create_feature("authentication").name == "authentication"

    def test_default_catalog_dependencies_are_known_kinds(self):
        for kind, template in DEFAULT_FEATURE_CATALOG.items():
            for dep in template.dependencies:
                assert dep in DEFAULT_FEATURE_CATALOG, (kind, dep)


class TestClassifyPath:
    """Tests for path-based artifact classification."""

    @pytest.mark.parametrize(
        "path,kind",
        [
            ("src/hooks/useAuth.ts", ArtifactKind.HOOK),
            ("src/useFeed.ts", ArtifactKind.HOOK),
            ("src/api/hooks/useThing.ts", ArtifactKind.HOOK),
            ("src/lib/config.ts", ArtifactKind.UTILITY),
            ("src/utils/date.ts", ArtifactKind.UTILITY),
            ("src/api/comments.ts", ArtifactKind.ENDPOINT),
            ("supabase/functions/send.ts", ArtifactKind.ENDPOINT),
            ("src/pages/Home.tsx", ArtifactKind.PAGE),
            ("src/routes/index.tsx", ArtifactKind.PAGE),
            ("tailwind.config.js", ArtifactKind.CONFIG),
            (".env.example", ArtifactKind.CONFIG),
            ("src/components/Button.tsx", ArtifactKind.COMPONENT),
            ("src/App.tsx", ArtifactKind.COMPONENT),
            ("src/components/ConfigPanel.tsx", ArtifactKind.COMPONENT),
            ("src/config/env.ts", ArtifactKind.CONFIG),
            ("tsconfig.json", ArtifactKind.CONFIG),
            ("supabase/migrations/001_init.sql", ArtifactKind.SCHEMA),
            ("prisma/schema.prisma", ArtifactKind.SCHEMA),
            ("src/db/users.ts", ArtifactKind.SCHEMA),
            ("src/types/index.ts", ArtifactKind.TYPES),
            ("src/env.d.ts", ArtifactKind.TYPES),
            ("src/components/Button.test.tsx", ArtifactKind.TEST),
            ("tests/test_api.py", ArtifactKind.TEST),
        ],
    )
    def test_classification(self, path, kind):
        assert classify_path(path) == kind

    def test_windows_separators(self):
        assert classify_path("src\\hooks\\useAuth.ts") == ArtifactKind.HOOK

    def test_declared_kind_wins(self):
        artifact = ArtifactSpec(path="src/App.tsx", kind=ArtifactKind.PAGE)
        assert classify_artifact(artifact) == ArtifactKind.PAGE
