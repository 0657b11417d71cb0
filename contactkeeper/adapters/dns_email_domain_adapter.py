"""
DnsEmailDomainAdapter - Implements IEmailDomainGateway.
Checks that an email's domain publishes MX records, using dnspython's
async resolver. Advisory only: every failure becomes valid=False.
"""

import logging
import re
from typing import Optional

import dns.asyncresolver
import dns.exception
import dns.resolver

from ..domain.interfaces.i_email_domain_gateway import (
    EmailDomainResult,
    IEmailDomainGateway,
)
from ..infrastructure.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DNS_TIMEOUT_SECONDS = 5.0


class DnsEmailDomainAdapter(IEmailDomainGateway):
    def __init__(
        self,
        rate_limiter: Optional[RateLimiter] = None,
        timeout_seconds: float = DNS_TIMEOUT_SECONDS,
    ):
        self.rate_limiter = rate_limiter
        self.timeout_seconds = timeout_seconds

    async def check_email(self, email: str) -> EmailDomainResult:
        if not email:
            return EmailDomainResult(valid=None, reason="No email address")

        if not EMAIL_RE.match(email):
            return EmailDomainResult(valid=False, reason="Invalid email format")

        domain = email.rsplit("@", 1)[1].lower()
        if self.rate_limiter is not None:
            await self.rate_limiter.throttle()

        try:
            answers = await dns.asyncresolver.resolve(
                domain, "MX", lifetime=self.timeout_seconds
            )
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer, dns.resolver.NoNameservers) as e:
            logger.debug(f"[MX] {domain}: {e.__class__.__name__}")
            return EmailDomainResult(
                valid=False, reason=f"DNS lookup failed: {e.__class__.__name__}"
            )
        except dns.exception.Timeout:
            logger.warning(f"[MX] Timeout resolving {domain}")
            return EmailDomainResult(valid=False, reason="DNS lookup failed: timeout")
        except Exception as e:
            logger.warning(f"[MX] Error resolving {domain}: {e}")
            return EmailDomainResult(valid=False, reason=f"DNS lookup failed: {e}")

        if len(answers) > 0:
            return EmailDomainResult(valid=True, reason="Domain has valid MX records")
        return EmailDomainResult(valid=False, reason="No MX records found for domain")
