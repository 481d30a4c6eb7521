"""
================================================================================
Scenario Data Factory
================================================================================

Immutable test fixture data for the journey scenarios, plus generators for
values that must be unique per scenario (registration emails).

Features:
- Frozen dataclasses passed by value into page actions
- Variants derived with `dataclasses.replace`
- Timestamp + random suffixed emails so irrevocable submissions never collide
- Local classification of SA mobile numbers and email syntax

================================================================================
"""

import random
import re
import string
import time
from dataclasses import dataclass, replace
from typing import Optional


# South African mobile: leading "0" or "+27", then nine more digits
SA_MOBILE_PATTERN = re.compile(r"^(?:0|\+27)\d{9}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")


def is_valid_sa_mobile(value: str) -> bool:
    return bool(SA_MOBILE_PATTERN.match(value.strip()))


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value.strip()))


# ================================================================================
# Data Models
# ================================================================================

@dataclass(frozen=True)
class Credentials:
    username: str
    password: str


@dataclass(frozen=True)
class ContactDetails:
    mobile: str
    email: str

    @property
    def is_valid(self) -> bool:
        return is_valid_sa_mobile(self.mobile) and is_valid_email(self.email)


@dataclass(frozen=True)
class EmploymentDetails:
    """Employment & income step. `None` fields are left untouched."""
    status: Optional[str] = None
    employer: Optional[str] = None
    gross_income: Optional[str] = None
    net_income: Optional[str] = None
    salary_day: Optional[str] = None

    @property
    def net_exceeds_gross(self) -> bool:
        try:
            return float(self.net_income) > float(self.gross_income)
        except (TypeError, ValueError):
            return False


@dataclass(frozen=True)
class RegistrationData:
    """Shopify customer registration. `None` fields are left blank."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


@dataclass(frozen=True)
class ForgotPasswordData:
    cell_number: Optional[str] = None
    id_number: Optional[str] = None


# ================================================================================
# Reusable fixture data
# ================================================================================

VALID_CONTACT = ContactDetails(mobile="0821234567", email="test.applicant@example.com")

VALID_EMPLOYMENT = EmploymentDetails(
    status="Permanent",
    employer="Acme Corp",
    gross_income="25000",
    net_income="18000",
    salary_day="25",
)

INVALID_CREDENTIALS = Credentials(username="invalid@user.com", password="wrongpassword")

# Valid format but not registered on UAT1
UNREGISTERED_ACCOUNT = ForgotPasswordData(cell_number="0899999999", id_number="9999999999999")

VALID_PASSWORD = "Password123"
WEAK_PASSWORD = "12345"


# ================================================================================
# Factory
# ================================================================================

class ScenarioDataFactory:
    """
    Generates per-scenario unique data.

    Every submission against the remote applications is irrevocable, so each
    scenario registers with a fresh email.
    """

    DEFAULT_DOMAIN = "test.com"

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Random seed for reproducible suffixes
        """
        self._random = random.Random(seed)
        self._issued: set = set()

    def _random_string(self, length: int = 6) -> str:
        chars = string.ascii_lowercase + string.digits
        return "".join(self._random.choice(chars) for _ in range(length))

    def unique_email(self, prefix: str = "autotest", domain: Optional[str] = None) -> str:
        """Return `<prefix>+<epoch ms><random>@<domain>`, never repeated by this factory."""
        domain = domain or self.DEFAULT_DOMAIN
        while True:
            email = f"{prefix}+{int(time.time() * 1000)}{self._random_string()}@{domain}"
            if email not in self._issued:
                self._issued.add(email)
                return email

    def registration(self, prefix: str = "tuang", **overrides: Optional[str]) -> RegistrationData:
        """
        Valid registration data with a unique email; keyword overrides
        (including `None` to leave a field blank) replace single fields.
        """
        data = RegistrationData(
            first_name="Tuang",
            last_name="Test",
            email=self.unique_email(prefix),
            password=VALID_PASSWORD,
        )
        return replace(data, **overrides)


__all__ = [
    "Credentials",
    "ContactDetails",
    "EmploymentDetails",
    "RegistrationData",
    "ForgotPasswordData",
    "ScenarioDataFactory",
    "VALID_CONTACT",
    "VALID_EMPLOYMENT",
    "INVALID_CREDENTIALS",
    "UNREGISTERED_ACCOUNT",
    "VALID_PASSWORD",
    "WEAK_PASSWORD",
    "is_valid_sa_mobile",
    "is_valid_email",
]
