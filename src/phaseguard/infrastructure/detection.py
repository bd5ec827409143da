"""
Keyword-based feature detection.

Matches a request against one pattern per feature kind and expands the
matches through a FeatureCatalog. Good enough for demos and tests; a real
deployment would put a language model behind FeatureDetectorInterface.
"""

import logging
import re
from collections.abc import Mapping

from phaseguard.domain.catalog import DEFAULT_FEATURE_CATALOG, FeatureCatalog
from phaseguard.domain.interfaces import FeatureDetectorInterface
from phaseguard.domain.models import Feature

logger = logging.getLogger("phaseguard.detection")

DEFAULT_PATTERNS: Mapping[str, re.Pattern[str]] = {
    kind: re.compile(pattern, re.IGNORECASE)
    for kind, pattern in (
        ("authentication", r"auth|login|signup|sign up|register|password"),
        ("userProfiles", r"profile|user.*info|account|avatar"),
        ("videoUpload", r"video.*upload|upload.*video|post.*video"),
        ("videoProcessing", r"transcode|encode|compress|video.*process"),
        ("feed", r"feed|timeline|for you|discover"),
        ("comments", r"comment|reply|thread"),
        ("likes", r"like|heart|favorite|upvote"),
        ("search", r"search|find|discover|explore"),
        ("notifications", r"notif|alert|push"),
        ("messaging", r"chat|message|\bdm\b|direct message"),
        ("payments", r"payment|checkout|stripe|billing"),
        ("analytics", r"analytic|track|metric|insight"),
    )
}

IMPLICIT_FEATURE = "database"
AUTH_FEATURE = "authentication"


class KeywordFeatureDetector(FeatureDetectorInterface):
    """
    Detects catalog features by keyword.

    When anything matches, the database feature is prepended; authentication
    is inserted after it if a detected feature depends on it directly.
    """

    def __init__(
        self,
        catalog: FeatureCatalog = DEFAULT_FEATURE_CATALOG,
        patterns: Mapping[str, re.Pattern[str]] = DEFAULT_PATTERNS,
    ):
        self._catalog = catalog
        self._patterns = patterns

    def detect(self, request: str) -> list[Feature]:
        features = [
            self._catalog.create_feature(kind)
            for kind, pattern in self._patterns.items()
            if kind != IMPLICIT_FEATURE and pattern.search(request)
        ]
        if not features:
            logger.debug("No features detected")
            return []

        features.insert(0, self._catalog.create_feature(IMPLICIT_FEATURE))

        ids = {f.id for f in features}
        if AUTH_FEATURE not in ids and any(
            AUTH_FEATURE in f.dependencies for f in features
        ):
            features.insert(1, self._catalog.create_feature(AUTH_FEATURE))

        return features
