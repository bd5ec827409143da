"""
Static catalog of third-party resources a generated project may need.

Detection is keyword based over the request text plus the detected
feature ids; nothing here talks to the providers.
"""

import os
import re
from collections.abc import Iterable, Mapping, Sequence

from phaseguard.domain.interfaces import ExternalResourceCatalogInterface
from phaseguard.domain.models import ExternalResource

BUILTIN_RESOURCES: tuple[ExternalResource, ...] = (
    ExternalResource(
        id="stripe",
        name="Stripe",
        category="payment",
        description="Payment processing and subscription management",
        signup_url="https://dashboard.stripe.com/register",
        docs_url="https://stripe.com/docs",
        secrets=("STRIPE_SECRET_KEY", "STRIPE_PUBLISHABLE_KEY"),
        setup_steps=(
            "Sign up at dashboard.stripe.com",
            "Enable test mode",
            "Go to Developers → API keys",
            "Copy the secret and publishable keys",
        ),
    ),
    ExternalResource(
        id="openai",
        name="OpenAI",
        category="ai",
        description="AI models for chat, completion, and embeddings",
        signup_url="https://platform.openai.com/signup",
        docs_url="https://platform.openai.com/docs",
        secrets=("OPENAI_API_KEY",),
        setup_steps=(
            "Sign up at platform.openai.com",
            "Add billing information",
            "Create a new secret key under API keys",
            "Set usage limits to prevent unexpected charges",
        ),
    ),
    ExternalResource(
        id="aws",
        name="AWS (Amazon Web Services)",
        category="storage",
        description="Cloud storage (S3), computing, and other services",
        signup_url="https://portal.aws.amazon.com/billing/signup",
        docs_url="https://docs.aws.amazon.com",
        secrets=("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_REGION"),
        provides=("AWS S3",),
        setup_steps=(
            "Sign up at aws.amazon.com",
            "Create an IAM user with programmatic access",
            "Attach an S3 access policy",
            "Create an access key and choose a region",
        ),
    ),
    ExternalResource(
        id="sendgrid",
        name="SendGrid",
        category="email",
        description="Transactional and marketing email service",
        signup_url="https://signup.sendgrid.com",
        docs_url="https://docs.sendgrid.com",
        secrets=("SENDGRID_API_KEY",),
        setup_steps=(
            "Sign up at sendgrid.com",
            "Complete sender authentication",
            "Create an API key under Settings → API Keys",
        ),
    ),
    ExternalResource(
        id="twilio",
        name="Twilio",
        category="sms",
        description="SMS, voice calls, and messaging platform",
        signup_url="https://www.twilio.com/try-twilio",
        docs_url="https://www.twilio.com/docs",
        secrets=("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_PHONE_NUMBER"),
        setup_steps=(
            "Sign up at twilio.com/try-twilio",
            "Copy the Account SID and Auth Token from the console",
            "Buy a phone number",
        ),
    ),
    ExternalResource(
        id="cloudinary",
        name="Cloudinary",
        category="storage",
        description="Image and video management platform",
        signup_url="https://cloudinary.com/users/register/free",
        docs_url="https://cloudinary.com/documentation",
        secrets=(
            "CLOUDINARY_CLOUD_NAME",
            "CLOUDINARY_API_KEY",
            "CLOUDINARY_API_SECRET",
        ),
        setup_steps=(
            "Sign up at cloudinary.com",
            "Open the dashboard",
            "Copy Cloud Name, API Key, and API Secret",
        ),
    ),
    ExternalResource(
        id="gemini",
        name="Google Gemini AI",
        category="ai",
        description="Google's AI model for chat, vision, and reasoning",
        signup_url="https://makersuite.google.com/app/apikey",
        docs_url="https://ai.google.dev/docs",
        secrets=("GEMINI_API_KEY",),
        setup_steps=(
            "Sign in at makersuite.google.com",
            "Create an API key for your project",
        ),
    ),
    ExternalResource(
        id="mux",
        name="Mux",
        category="video",
        description="Video hosting, encoding, and live streaming",
        signup_url="https://dashboard.mux.com/signup",
        docs_url="https://docs.mux.com",
        secrets=("MUX_TOKEN_ID", "MUX_TOKEN_SECRET"),
        setup_steps=(
            "Sign up at dashboard.mux.com",
            "Create an access token under Settings → Access Tokens",
            "Copy the token id and secret",
        ),
    ),
)

# resource id -> (request pattern, feature ids that imply it)
_DETECTION_RULES: tuple[tuple[str, re.Pattern[str], frozenset[str]], ...] = (
    (
        "stripe",
        re.compile(r"payment|stripe|checkout|subscription|billing"),
        frozenset({"payments"}),
    ),
    (
        "openai",
        re.compile(r"\bai\b|chatbot|chat gpt|openai|\bgpt"),
        frozenset({"ai"}),
    ),
    ("gemini", re.compile(r"gemini|google ai|\bbard\b"), frozenset()),
    ("mux", re.compile(r"\bmux\b|live ?stream"), frozenset()),
    (
        "aws",
        re.compile(r"\baws\b|\bs3\b|cloud storage|file upload"),
        frozenset(),
    ),
    (
        "cloudinary",
        re.compile(r"cloudinary|image upload|video upload|image transformation"),
        frozenset({"videoUpload"}),
    ),
    ("sendgrid", re.compile(r"e-?mail|sendgrid|send mail"), frozenset({"email"})),
    (
        "twilio",
        re.compile(r"\bsms\b|text message|twilio|\bphone\b"),
        frozenset({"sms"}),
    ),
)


class StaticResourceCatalog(ExternalResourceCatalogInterface):
    """Read-only resource catalog with keyword-based detection."""

    def __init__(self, resources: Iterable[ExternalResource] = BUILTIN_RESOURCES):
        self._resources = {r.id: r for r in resources}

    def get(self, resource_id: str) -> ExternalResource | None:
        return self._resources.get(resource_id)

    def all(self) -> list[ExternalResource]:
        return list(self._resources.values())

    def by_category(self, category: str) -> list[ExternalResource]:
        return [r for r in self._resources.values() if r.category == category]

    def detect_required(
        self, request: str, feature_ids: Sequence[str]
    ) -> list[ExternalResource]:
        """Resources implied by the request text or the detected features."""
        text = request.lower()
        features = set(feature_ids)
        required: list[ExternalResource] = []
        for resource_id, pattern, implied_by in _DETECTION_RULES:
            resource = self._resources.get(resource_id)
            if resource is None:
                continue
            if pattern.search(text) or implied_by & features:
                required.append(resource)
        return required

    def configured_apis(
        self, environ: Mapping[str, str] | None = None
    ) -> list[str]:
        """
        API names covered by resources whose secrets are all set and non-empty.

        Each configured resource contributes its display name followed by
        the feature API names it provides ("AWS S3" for AWS), so the result
        can be passed straight to readiness checks.

        Args:
            environ: Environment to inspect (defaults to os.environ)
        """
        env = os.environ if environ is None else environ
        return [
            api
            for r in self._resources.values()
            if r.secrets and all(env.get(secret) for secret in r.secrets)
            for api in (r.name, *r.provides)
        ]
