"""Customer aggregate.

Customers are identified by their e-mail address at checkout; the numeric
id is assigned by the repository.
"""

from __future__ import annotations

from dataclasses import dataclass

from bookstore.domain.exceptions import ValidationError


@dataclass
class Customer:

    id: int | None
    first_name: str
    last_name: str
    email: str
    phone_number: str
    address: str
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None

    @staticmethod
    def create(
        first_name: str,
        last_name: str,
        email: str,
        phone_number: str,
        address: str,
        city: str | None = None,
        postal_code: str | None = None,
        country: str | None = None,
    ) -> Customer:
        for label, value in (
            ("First name", first_name),
            ("Last name", last_name),
            ("Phone number", phone_number),
            ("Address", address),
        ):
            if not value or not value.strip():
                raise ValidationError(f"{label} is required")
        return Customer(
            id=None,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=normalize_email(email),
            phone_number=phone_number.strip(),
            address=address.strip(),
            city=city,
            postal_code=postal_code,
            country=country,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


def normalize_email(email: str) -> str:
    """Trim and lower-case an e-mail address, rejecting obvious garbage."""
    if not email or "@" not in email:
        raise ValidationError(f"Invalid e-mail address: {email!r}")
    local, _, domain = email.strip().rpartition("@")
    if not local or "." not in domain:
        raise ValidationError(f"Invalid e-mail address: {email!r}")
    return email.strip().lower()
