"""SQLAlchemy-backed implementation of CustomerRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookstore.domain.exceptions import CustomerNotFoundError
from bookstore.domain.model.customer import Customer
from bookstore.domain.repository.customer_repository import CustomerRepository
from bookstore.infrastructure.persistence.tables import CustomerRow


class SqlCustomerRepository(CustomerRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, customer_id: int) -> Customer | None:
        row = self._session.get(CustomerRow, customer_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def get_by_email(self, email: str) -> Customer | None:
        row = self._session.scalars(
            select(CustomerRow)
            .where(func.lower(CustomerRow.email) == email.strip().lower())
            .execution_options(populate_existing=True)
        ).one_or_none()
        return self._to_domain(row) if row is not None else None

    def save(self, customer: Customer) -> None:
        if customer.id is None:
            row = CustomerRow()
            self._session.add(row)
        else:
            row = self._session.get(CustomerRow, customer.id, populate_existing=True)
            if row is None:
                raise CustomerNotFoundError(f"Customer #{customer.id} not found")

        row.first_name = customer.first_name
        row.last_name = customer.last_name
        row.email = customer.email
        row.phone_number = customer.phone_number
        row.address = customer.address
        row.city = customer.city
        row.postal_code = customer.postal_code
        row.country = customer.country
        self._session.flush()
        customer.id = row.id

    @staticmethod
    def _to_domain(row: CustomerRow) -> Customer:
        return Customer(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            phone_number=row.phone_number,
            address=row.address,
            city=row.city,
            postal_code=row.postal_code,
            country=row.country,
        )
