"""
Pytest configuration and shared fixtures
"""
from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from hms.controller import HotelController
from hms.database import Base, create_db_engine, init_db
from hms.main import create_app
from hms.models.enums import EmployeePosition, RoomStatus, RoomType, SalaryType
from hms.models.schemas import BookingCreate, EmployeeCreate, RoomCreate
from hms.services.gateway import CrudGateway
from hms.services.preferences import PreferencesStore
from hms.store.sheet_store import SheetStore


@pytest.fixture(scope="function")
def db_engine():
    """In-memory store database"""
    engine = create_db_engine("sqlite://")
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def store(session_factory):
    return SheetStore(session_factory)


@pytest.fixture
def gateway(store):
    return CrudGateway.local(store)


@pytest.fixture
def controller(gateway, session_factory):
    """Controller over the local store, LLM disabled"""
    controller = HotelController(gateway, preferences=PreferencesStore(session_factory))
    result = controller.load()
    assert result.success
    return controller


@pytest.fixture
def client(store, controller):
    app = create_app(sheet_store=store, controller=controller)
    with TestClient(app) as test_client:
        yield test_client


# ============== Sample data ==============

@pytest.fixture
def sample_rooms(controller):
    """A107 Standard Twin 500, A101 Standard 400, N1 Standard Twin 600, A204 let monthly"""
    rooms = {}
    for number, room_type, price, status in [
        ("A107", RoomType.STANDARD_TWIN, 500, RoomStatus.AVAILABLE),
        ("A101", RoomType.STANDARD, 400, RoomStatus.AVAILABLE),
        ("N1", RoomType.STANDARD_TWIN, 600, RoomStatus.AVAILABLE),
        ("A204", RoomType.STANDARD, 400, RoomStatus.MONTHLY_RENTAL),
    ]:
        result = controller.rooms.create_room(
            RoomCreate(number=number, type=room_type, price=Decimal(price), status=status)
        )
        assert result.success, result.message
        rooms[number] = controller.rooms.get_room(result.entity_id)
    return rooms


@pytest.fixture
def sample_employees(controller):
    employees = {}
    for name, position, salary_type, rate in [
        ("สมชาย ใจดี", EmployeePosition.MANAGER, SalaryType.MONTHLY, 45000),
        ("วิชัย มีสุข", EmployeePosition.HOUSEKEEPING, SalaryType.DAILY, 500),
    ]:
        result = controller.employees.create_employee(EmployeeCreate(
            name=name, position=position, hire_date=date(2023, 1, 1),
            salary_type=salary_type, salary_rate=Decimal(rate),
        ))
        assert result.success, result.message
        employees[name] = controller.employees.get_employee(result.entity_id)
    return employees


@pytest.fixture
def sample_booking(controller, sample_rooms):
    """Somchai in A107 for 2024-06-01 .. 2024-06-03"""
    result = controller.bookings.create_booking(BookingCreate(
        guest_name="Somchai",
        phone="0812345678",
        room_number="A107",
        check_in_date=date(2024, 6, 1),
        check_out_date=date(2024, 6, 3),
    ))
    assert result.success, result.message
    return controller.bookings.get_booking(result.entity_id)
