"""Tests for StaticResourceCatalog."""

import pytest

from phaseguard.application.validator import PhaseValidator
from phaseguard.domain.models import Feature, Phase, PhaseRole
from phaseguard.infrastructure.resources import BUILTIN_RESOURCES, StaticResourceCatalog


@pytest.fixture
def catalog() -> StaticResourceCatalog:
    return StaticResourceCatalog()


class TestLookup:
    def test_get(self, catalog):
        stripe = catalog.get("stripe")

        assert stripe.name == "Stripe"
        assert "STRIPE_SECRET_KEY" in stripe.secrets
        assert catalog.get("nope") is None

    def test_all(self, catalog):
        assert len(catalog.all()) == len(BUILTIN_RESOURCES)

    def test_by_category(self, catalog):
        ids = {r.id for r in catalog.by_category("ai")}
        assert ids == {"openai", "gemini"}


class TestDetectRequired:
    """Tests for resource detection from requests and features."""

    def test_from_request_text(self, catalog):
        ids = [r.id for r in catalog.detect_required("Sell plans with Stripe", [])]
        assert ids == ["stripe"]

    def test_implied_by_feature(self, catalog):
        ids = [r.id for r in catalog.detect_required("a video app", ["videoUpload"])]
        assert ids == ["cloudinary"]

    def test_no_duplicates(self, catalog):
        required = catalog.detect_required(
            "checkout with stripe billing", ["payments"]
        )
        assert [r.id for r in required] == ["stripe"]

    def test_ai_is_word_bounded(self, catalog):
        ids = [r.id for r in catalog.detect_required("send an email receipt", [])]

        assert "openai" not in ids
        assert "sendgrid" in ids

    def test_nothing_required(self, catalog):
        assert catalog.detect_required("a todo list", []) == []


class TestConfiguredApis:
    def test_all_secrets_required(self, catalog):
        environ = {
            "STRIPE_SECRET_KEY": "sk",
            "STRIPE_PUBLISHABLE_KEY": "pk",
            "OPENAI_API_KEY": "",
            "SENDGRID_API_KEY": "sg",
        }

        assert catalog.configured_apis(environ) == ["Stripe", "SendGrid"]

    def test_reads_process_environment(self, catalog, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "g")

        assert "Google Gemini AI" in catalog.configured_apis()

    def test_provided_api_names_included(self, catalog):
        environ = {
            "AWS_ACCESS_KEY_ID": "id",
            "AWS_SECRET_ACCESS_KEY": "secret",
            "AWS_REGION": "eu-west-1",
            "MUX_TOKEN_ID": "mux-id",
            "MUX_TOKEN_SECRET": "mux-secret",
        }

        assert catalog.configured_apis(environ) == [
            "AWS (Amazon Web Services)",
            "AWS S3",
            "Mux",
        ]

    def test_configured_apis_satisfy_video_upload_readiness(self, catalog):
        environ = {
            "AWS_ACCESS_KEY_ID": "id",
            "AWS_SECRET_ACCESS_KEY": "secret",
            "AWS_REGION": "eu-west-1",
            "CLOUDINARY_CLOUD_NAME": "demo",
            "CLOUDINARY_API_KEY": "key",
            "CLOUDINARY_API_SECRET": "secret",
        }
        phase = Phase(
            sequence=1,
            name="Phase 1",
            role=PhaseRole.FOUNDATION,
            features=(
                Feature(
                    id="videoUpload",
                    name="Video Upload",
                    required_external_apis=("Cloudinary", "AWS S3"),
                ),
            ),
        )

        result = PhaseValidator().is_phase_ready(
            phase, set(), catalog.configured_apis(environ)
        )

        assert result.warnings == ()
