"""
Tenant and invoice service
A tenant holds one room on a monthly contract; the room is marked Monthly
Rental while let and Available once freed. Invoices bill the monthly rent.
"""
import logging
from datetime import date, timedelta
from typing import List, Optional

from hms.config import settings
from hms.models.enums import ErrorCode, InvoiceStatus, RoomStatus
from hms.models.schemas import (
    InvoiceCreate, InvoiceRecord, TenantCreate, TenantRecord, TenantUpdate
)
from hms.services.base import HotelService, serialized
from hms_core.ai.result import ActionResult, AffectedEntity

logger = logging.getLogger(__name__)


class TenantService(HotelService):
    """Tenant service"""

    entity_type = "Tenant"

    def list_tenants(self) -> List[TenantRecord]:
        return sorted(self.state.tenants, key=lambda t: t.name.lower())

    def get_tenant(self, tenant_id: str) -> Optional[TenantRecord]:
        return self.state.find("tenants", tenant_id)

    def _check_room_free(self, room_id: str) -> Optional[ActionResult]:
        room = self.state.find("rooms", room_id)
        if room is None:
            return self._not_found(room_id, "Room")
        if room.status != RoomStatus.AVAILABLE:
            return ActionResult.fail(
                f"Room {room.number} is {room.status.value}, not Available",
                error_code=ErrorCode.CONFLICT,
                entity_type="Room",
                entity_id=room_id,
            )
        return None

    def _set_room_status(self, room_id: str, status: RoomStatus) -> bool:
        if self.state.find("rooms", room_id) is None:
            return True
        updated = self.gateway.rooms.update(room_id, {"status": status})
        if not updated.success:
            logger.warning(f"Could not set room {room_id} to {status.value}: {updated.message}")
            return False
        self.state.upsert("rooms", updated.data)
        return True

    @serialized
    def create_tenant(self, data: TenantCreate) -> ActionResult:
        if data.contract_end_date <= data.contract_start_date:
            return ActionResult.fail("Contract end must be after contract start", error_code=ErrorCode.INVALID_DATES)
        refusal = self._check_room_free(data.room_id)
        if refusal is not None:
            return refusal

        created = self.gateway.tenants.create(data.model_dump())
        if not created.success:
            return self._gateway_failure(created)
        tenant = created.data

        if not self._set_room_status(tenant.room_id, RoomStatus.MONTHLY_RENTAL):
            rolled_back = self.gateway.tenants.delete(tenant.id)
            if not rolled_back.success:
                logger.error(f"Compensation failed, tenant {tenant.id} left behind")
            return ActionResult.fail(
                f"Could not mark room {tenant.room_id} as Monthly Rental",
                error_code=ErrorCode.REMOTE_FAILURE,
            )

        self.state.upsert("tenants", tenant)
        logger.info(f"Tenant {tenant.id} moved into room {tenant.room_id}")
        result = self._done(f"Tenant {tenant.name} added", tenant, "created")
        result.affected_entities.append(AffectedEntity("Room", tenant.room_id, "updated"))
        return result

    def _restore_tenant(self, tenant: TenantRecord, changes: dict) -> None:
        restored = self.gateway.tenants.update(tenant.id, tenant.model_dump(include=set(changes)))
        if not restored.success:
            logger.error(f"Compensation failed, tenant {tenant.id} left with {changes}")

    @serialized
    def update_tenant(self, tenant_id: str, data: TenantUpdate) -> ActionResult:
        tenant = self.get_tenant(tenant_id)
        if tenant is None:
            return self._not_found(tenant_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        start = changes.get("contract_start_date", tenant.contract_start_date)
        end = changes.get("contract_end_date", tenant.contract_end_date)
        if end <= start:
            return ActionResult.fail("Contract end must be after contract start", error_code=ErrorCode.INVALID_DATES)

        moving = "room_id" in changes and changes["room_id"] != tenant.room_id
        if moving:
            refusal = self._check_room_free(changes["room_id"])
            if refusal is not None:
                return refusal

        updated = self.gateway.tenants.update(tenant_id, changes)
        if not updated.success:
            return self._gateway_failure(updated)

        if moving:
            new_room_id = updated.data.room_id
            if not self._set_room_status(new_room_id, RoomStatus.MONTHLY_RENTAL):
                self._restore_tenant(tenant, changes)
                return ActionResult.fail(
                    f"Could not mark room {new_room_id} as Monthly Rental",
                    error_code=ErrorCode.REMOTE_FAILURE,
                )
            if not self._set_room_status(tenant.room_id, RoomStatus.AVAILABLE):
                self._set_room_status(new_room_id, RoomStatus.AVAILABLE)
                self._restore_tenant(tenant, changes)
                return ActionResult.fail(
                    f"Could not free room {tenant.room_id}",
                    error_code=ErrorCode.REMOTE_FAILURE,
                )
            logger.info(f"Tenant {tenant_id} moved from {tenant.room_id} to {new_room_id}")

        self.state.upsert("tenants", updated.data)
        return self._done(f"Tenant {updated.data.name} updated", updated.data, "updated")

    @serialized
    def delete_tenant(self, tenant_id: str) -> ActionResult:
        """Deletes the tenant's invoices too and frees the room"""
        tenant = self.get_tenant(tenant_id)
        if tenant is None:
            return self._not_found(tenant_id)

        if not self._set_room_status(tenant.room_id, RoomStatus.AVAILABLE):
            return ActionResult.fail(
                f"Could not free room {tenant.room_id}",
                error_code=ErrorCode.REMOTE_FAILURE,
            )

        for invoice in [i for i in self.state.invoices if i.tenant_id == tenant_id]:
            deleted = self.gateway.invoices.delete(invoice.id)
            if not deleted.success:
                self._set_room_status(tenant.room_id, RoomStatus.MONTHLY_RENTAL)
                return self._gateway_failure(deleted)
            self.state.remove("invoices", invoice.id)

        deleted = self.gateway.tenants.delete(tenant_id)
        if not deleted.success:
            self._set_room_status(tenant.room_id, RoomStatus.MONTHLY_RENTAL)
            return self._gateway_failure(deleted)
        self.state.remove("tenants", tenant_id)

        logger.info(f"Tenant {tenant_id} deleted, room {tenant.room_id} freed")
        return ActionResult.ok(
            f"Tenant {tenant.name} deleted",
            entity_type="Tenant",
            entity_id=tenant_id,
            affected_entities=[
                AffectedEntity("Tenant", tenant_id, "deleted"),
                AffectedEntity("Room", tenant.room_id, "updated"),
            ],
        )


class InvoiceService(HotelService):
    """Monthly rent invoices"""

    entity_type = "Invoice"

    def list_invoices(self, tenant_id: Optional[str] = None, status: Optional[InvoiceStatus] = None) -> List[InvoiceRecord]:
        invoices = self.state.invoices
        if tenant_id:
            invoices = [i for i in invoices if i.tenant_id == tenant_id]
        if status:
            invoices = [i for i in invoices if i.status == status]
        return sorted(invoices, key=lambda i: (i.issue_date, i.id), reverse=True)

    @serialized
    def create_invoice(self, data: InvoiceCreate, today: Optional[date] = None) -> ActionResult:
        """Bill the tenant's monthly rent, due INVOICE_DUE_DAYS after issue"""
        tenant = self.state.find("tenants", data.tenant_id)
        if tenant is None:
            return self._not_found(data.tenant_id, "Tenant")

        issued = today or date.today()
        created = self.gateway.invoices.create({
            "tenant_id": tenant.id,
            "period": data.period.strip(),
            "amount": tenant.monthly_rent,
            "issue_date": issued,
            "due_date": issued + timedelta(days=settings.INVOICE_DUE_DAYS),
            "status": InvoiceStatus.UNPAID,
        })
        if not created.success:
            return self._gateway_failure(created)

        self.state.upsert("invoices", created.data)
        logger.info(f"Invoice {created.data.id} issued to tenant {tenant.id} for {data.period}")
        return self._done(f"Invoice for {tenant.name}, {data.period} created", created.data, "created")

    @serialized
    def mark_paid(self, invoice_id: str) -> ActionResult:
        invoice = self.state.find("invoices", invoice_id)
        if invoice is None:
            return self._not_found(invoice_id)
        if invoice.status == InvoiceStatus.PAID:
            return ActionResult.fail(f"Invoice {invoice_id} is already paid", error_code=ErrorCode.INVALID_TRANSITION)

        updated = self.gateway.invoices.update(invoice_id, {"status": InvoiceStatus.PAID})
        if not updated.success:
            return self._gateway_failure(updated)
        self.state.upsert("invoices", updated.data)
        return self._done(f"Invoice {invoice_id} marked as paid", updated.data, "updated")

    @serialized
    def mark_overdue(self, today: Optional[date] = None) -> ActionResult:
        """Flag every unpaid invoice past its due date"""
        today = today or date.today()
        flagged = []
        for invoice in list(self.state.invoices):
            if invoice.status == InvoiceStatus.UNPAID and invoice.due_date < today:
                updated = self.gateway.invoices.update(invoice.id, {"status": InvoiceStatus.OVERDUE})
                if not updated.success:
                    return self._gateway_failure(updated)
                self.state.upsert("invoices", updated.data)
                flagged.append(invoice.id)

        if flagged:
            logger.info(f"Invoices overdue: {flagged}")
        return ActionResult.ok(
            f"{len(flagged)} invoice(s) marked overdue",
            entity_type="Invoice",
            data={"invoice_ids": flagged},
            affected_entities=[AffectedEntity("Invoice", i, "updated") for i in flagged],
        )

    @serialized
    def delete_invoice(self, invoice_id: str) -> ActionResult:
        if self.state.find("invoices", invoice_id) is None:
            return self._not_found(invoice_id)
        deleted = self.gateway.invoices.delete(invoice_id)
        if not deleted.success:
            return self._gateway_failure(deleted)
        self.state.remove("invoices", invoice_id)
        return ActionResult.ok(
            f"Invoice {invoice_id} deleted",
            entity_type="Invoice",
            entity_id=invoice_id,
            affected_entities=[AffectedEntity("Invoice", invoice_id, "deleted")],
        )
