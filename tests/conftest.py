import asyncio

import pytest
from fastapi.testclient import TestClient

from barbershop_api.app.core.store import RecordStore, init_store, set_store
from barbershop_api.app.main import app
from barbershop_api.app.schemas.appointment import AppointmentCreate
from barbershop_api.app.schemas.customer import CustomerCreate
from barbershop_api.app.schemas.service import ServiceCreate
from barbershop_api.app.services.appointment_service import AppointmentService
from barbershop_api.app.services.catalog_service import CatalogService
from barbershop_api.app.services.customer_service import CustomerService


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def store(tmp_path):
    """A provisioned store in a temporary directory, installed process-wide."""
    store = RecordStore(str(tmp_path / "data"))
    init_store(store)
    set_store(store)
    yield store
    set_store(None)


@pytest.fixture
def client(store):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def customer(store):
    return run(CustomerService.create_customer(CustomerCreate(name="Test User", phone="012")))


@pytest.fixture
def service(store):
    return run(CatalogService.create_service(ServiceCreate(title="Cut", duration_min=30, price=15)))


@pytest.fixture
def book(customer, service):
    """Book an appointment for the default customer and service."""

    def _book(appointment_date, start_time, customer_id=None, service_id=None):
        return run(
            AppointmentService.create_appointment(
                AppointmentCreate(
                    customerId=customer_id or customer["id"],
                    serviceId=service_id or service["id"],
                    appointment_date=appointment_date,
                    start_time=start_time,
                )
            )
        )

    return _book
