"""Tests for KeywordFeatureDetector."""

import re

import pytest

from phaseguard.domain.catalog import DEFAULT_FEATURE_CATALOG, FeatureTemplate
from phaseguard.infrastructure.detection import KeywordFeatureDetector


@pytest.fixture
def detector() -> KeywordFeatureDetector:
    return KeywordFeatureDetector()


class TestKeywordFeatureDetector:
    """Tests for keyword-driven detection."""

    def test_nothing_detected(self, detector):
        assert detector.detect("a calculator") == []

    def test_database_prepended(self, detector):
        ids = [f.id for f in detector.detect("users leave comments on posts")]

        assert ids[0] == "database"
        assert "comments" in ids

    def test_authentication_inserted_for_dependents(self, detector):
        ids = [f.id for f in detector.detect("direct message between friends")]

        assert ids[:2] == ["database", "authentication"]
        assert "messaging" in ids

    def test_authentication_not_duplicated(self, detector):
        ids = [f.id for f in detector.detect("login and chat")]

        assert ids.count("authentication") == 1
        assert ids[1] == "authentication"

    def test_no_auth_when_nothing_needs_it(self, detector):
        ids = [f.id for f in detector.detect("track metrics")]

        assert ids == ["database", "analytics"]

    def test_case_insensitive(self, detector):
        ids = [f.id for f in detector.detect("VIDEO UPLOAD")]
        assert "videoUpload" in ids

    def test_dm_is_word_bounded(self, detector):
        ids = [f.id for f in detector.detect("admin panel")]
        assert "messaging" not in ids

    def test_features_come_from_catalog(self):
        catalog = DEFAULT_FEATURE_CATALOG.with_templates(
            comments=FeatureTemplate(name="Threads", estimated_work_units=2)
        )
        detector = KeywordFeatureDetector(catalog=catalog)

        comments = next(f for f in detector.detect("reply") if f.id == "comments")

        assert comments.name == "Threads"
        assert comments.estimated_work_units == 2

    def test_custom_patterns(self):
        detector = KeywordFeatureDetector(
            patterns={"payments": re.compile(r"invoice", re.IGNORECASE)}
        )

        ids = [f.id for f in detector.detect("send an Invoice")]

        assert ids == ["database", "authentication", "payments"]
