"""
Root conftest.py — shared fixtures and helpers for the entire test suite.

Provides:
- Contact / SearchCandidate / VerificationResult factory helpers
- Mock repository, search engine and email-gateway factories
- A zero-interval rate limiter so tests never wait
"""

import uuid
from datetime import datetime
from typing import List, Optional
from unittest.mock import AsyncMock

import pytest

from contactkeeper.domain.entities.contact import Contact
from contactkeeper.domain.entities.search_candidate import SearchCandidate
from contactkeeper.domain.entities.verification_result import (
    VerificationResult,
    VerificationStatus,
)
from contactkeeper.domain.interfaces.i_email_domain_gateway import EmailDomainResult
from contactkeeper.infrastructure.rate_limiter import RateLimiter

# Fixed "now" used by data-quality tests
NOW = datetime(2025, 6, 1, 12, 0, 0)


# ─────────────────────────────────────────────────────────────────────────────
# Domain object factories
# ─────────────────────────────────────────────────────────────────────────────


def make_contact(
    name: str = "Jane Smith",
    organization: Optional[str] = "Acme Corp",
    title: Optional[str] = "VP of Operations",
    email: Optional[str] = "jane.smith@acme.com",
    last_modified: Optional[datetime] = datetime(2025, 3, 1, 9, 0, 0),
    contact_id: Optional[str] = None,
) -> Contact:
    """Create a Contact with sensible test defaults."""
    return Contact(
        id=contact_id or str(uuid.uuid4()),
        name=name,
        organization=organization,
        title=title,
        email=email,
        last_verified=None,
        last_modified=last_modified,
    )


def make_candidate(
    title: str = "Jane Smith - VP of Operations - Acme Corp | LinkedIn",
    url: str = "https://www.linkedin.com/in/janesmith",
    snippet: str = "Jane Smith. VP of Operations at Acme Corp. Greater Boston.",
) -> SearchCandidate:
    return SearchCandidate(title=title, url=url, snippet=snippet)


def make_result(
    contact_id: Optional[str] = None,
    name: str = "Jane Smith",
    company: str = "Acme Corp",
    status: VerificationStatus = VerificationStatus.CONFIRMED,
    notes: str = "Found matching profile",
    confidence: Optional[float] = None,
    source_url: Optional[str] = None,
    issues: tuple = (),
    recommendations: tuple = (),
) -> VerificationResult:
    """Create a VerificationResult with sensible test defaults."""
    return VerificationResult(
        contact_id=contact_id or str(uuid.uuid4()),
        contact_name=name,
        company=company,
        status=status,
        notes=notes,
        confidence=confidence,
        source_url=source_url,
        issues=issues,
        recommendations=recommendations,
    )


def make_engine(name: str = "engine", candidates: Optional[List[SearchCandidate]] = None, error: Optional[Exception] = None):
    """AsyncMock search engine returning `candidates` or raising `error`."""
    engine = AsyncMock()
    engine.name = name
    if error is not None:
        engine.attempt.side_effect = error
    else:
        engine.attempt.return_value = candidates or []
    return engine


# ─────────────────────────────────────────────────────────────────────────────
# Mock collaborator fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def mock_repository():
    """AsyncMock for ICrmRepository."""
    mock = AsyncMock()
    mock.check_connection.return_value = None
    mock.get_contacts_for_verification.return_value = []
    mock.update_verification.return_value = None
    mock.get_verification_stats.return_value = {}
    return mock


@pytest.fixture
def mock_email_gateway():
    """AsyncMock for IEmailDomainGateway. Defaults to a valid domain."""
    mock = AsyncMock()
    mock.check_email.return_value = EmailDomainResult(
        valid=True, reason="Domain has valid MX records"
    )
    return mock


@pytest.fixture
def rate_limiter():
    """Real limiter with no spacing, so call counts can be asserted."""
    return RateLimiter(min_interval_ms=0)


@pytest.fixture
def sample_contact():
    return make_contact()
