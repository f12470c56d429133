"""Application service: Register Customer use case."""

from __future__ import annotations

import structlog

from bookstore.application.dto import CustomerDetails, CustomerDTO, to_customer_dto
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.customer import Customer
from bookstore.domain.repository.customer_repository import CustomerRepository
from bookstore.domain.repository.unit_of_work import AbstractUnitOfWork

logger = structlog.get_logger(__name__)


def build_customer(details: CustomerDetails) -> Customer:
    return Customer.create(
        first_name=details.first_name,
        last_name=details.last_name,
        email=details.email,
        phone_number=details.phone_number,
        address=details.address,
        city=details.city,
        postal_code=details.postal_code,
        country=details.country,
    )


def find_or_create_customer(
    customers: CustomerRepository, details: CustomerDetails
) -> Customer:
    """Return the customer registered under the e-mail, creating it if new."""
    customer = build_customer(details)
    existing = customers.get_by_email(customer.email)
    if existing is not None:
        logger.info("Existing customer found", customer_id=existing.id)
        return existing

    customers.save(customer)
    logger.info("Customer created", customer_id=customer.id)
    return customer


class RegisterCustomerHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, details: CustomerDetails) -> CustomerDTO:
        """Register a new customer; the e-mail must not be taken."""
        customer = build_customer(details)

        with self._uow as uow:
            if uow.customers.get_by_email(customer.email) is not None:
                raise ValidationError(
                    f"A customer with e-mail '{customer.email}' already exists"
                )
            uow.customers.save(customer)
            uow.commit()

        logger.info("Customer registered", customer_id=customer.id)
        return to_customer_dto(customer)
