"""
VIPAT HMS application entry point
Hotel management API: rooms, bookings, tenants, staff, finance and an AI assistant
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hms import __version__
from hms.config import settings
from hms.controller import HotelController
from hms.database import SessionLocal, init_db
from hms.routers import (
    assistant, bookings, documents, employees, expenses, guests, preferences,
    reports, rooms, store, sync, tasks, tenants
)
from hms.services.gateway import CrudGateway, HttpTransport
from hms.services.preferences import PreferencesStore
from hms.store.sheet_store import SheetStore
from hms_core.ai.llm_client import create_llm_client

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_controller(sheet_store: SheetStore) -> HotelController:
    """Wire the gateway to the remote store when STORE_URL is set, else in-process"""
    if settings.STORE_URL:
        logger.info(f"Using remote store at {settings.STORE_URL}")
        gateway = CrudGateway.remote(settings.STORE_URL, timeout=settings.STORE_TIMEOUT)
    else:
        gateway = CrudGateway.local(sheet_store)
    return HotelController(
        gateway,
        llm_client=create_llm_client(settings),
        preferences=PreferencesStore(SessionLocal),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: tables, store, controller, first load"""
    if getattr(app.state, "store", None) is None:
        init_db()
        app.state.store = SheetStore(SessionLocal)
    if getattr(app.state, "controller", None) is None:
        app.state.controller = build_controller(app.state.store)

    result = app.state.controller.load()
    if not result.success:
        logger.error(f"Starting with empty state: {result.message}")

    yield

    logger.info("Shutting down")
    transport = app.state.controller.gateway.transport
    if isinstance(transport, HttpTransport):
        transport.close()


def create_app(
    sheet_store: Optional[SheetStore] = None,
    controller: Optional[HotelController] = None,
) -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=f"{settings.APP_NAME} - Hotel Management",
        description="Rooms, bookings, tenants, staff, finance and an AI assistant",
        version=__version__,
        lifespan=lifespan
    )
    app.state.store = sheet_store
    app.state.controller = controller

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(rooms.router)
    app.include_router(guests.router)
    app.include_router(bookings.router)
    app.include_router(tenants.router)
    app.include_router(tenants.invoice_router)
    app.include_router(employees.router)
    app.include_router(employees.attendance_router)
    app.include_router(expenses.router)
    app.include_router(tasks.router)
    app.include_router(documents.router)
    app.include_router(reports.router)
    app.include_router(reports.payroll_router)
    app.include_router(assistant.router)
    app.include_router(preferences.router)
    app.include_router(sync.router)
    app.include_router(store.router)

    @app.get("/")
    def root():
        return {
            "name": settings.APP_NAME,
            "version": __version__,
        }

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("hms.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
