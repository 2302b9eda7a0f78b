"""
Tenant and invoice routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from hms.controller import HotelController, get_controller
from hms.models.enums import InvoiceStatus
from hms.models.schemas import (
    InvoiceCreate, InvoiceRecord, TenantCreate, TenantRecord, TenantUpdate
)
from hms.routers.common import not_found, unwrap

router = APIRouter(prefix="/tenants", tags=["Tenants"])
invoice_router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.get("", response_model=List[TenantRecord])
def list_tenants(controller: HotelController = Depends(get_controller)):
    return controller.tenants.list_tenants()


@router.get("/{tenant_id}", response_model=TenantRecord)
def get_tenant(tenant_id: str, controller: HotelController = Depends(get_controller)):
    tenant = controller.tenants.get_tenant(tenant_id)
    if tenant is None:
        raise not_found("Tenant", tenant_id)
    return tenant


@router.post("", response_model=TenantRecord, status_code=status.HTTP_201_CREATED)
def create_tenant(data: TenantCreate, controller: HotelController = Depends(get_controller)):
    """Let a room monthly; the room must be Available"""
    return unwrap(controller.tenants.create_tenant(data))


@router.put("/{tenant_id}", response_model=TenantRecord)
def update_tenant(tenant_id: str, data: TenantUpdate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.tenants.update_tenant(tenant_id, data))


@router.delete("/{tenant_id}")
def delete_tenant(tenant_id: str, controller: HotelController = Depends(get_controller)):
    result = controller.tenants.delete_tenant(tenant_id)
    unwrap(result)
    return {"message": result.message}


# ============== Invoices ==============

@invoice_router.get("", response_model=List[InvoiceRecord])
def list_invoices(
    tenant_id: Optional[str] = None,
    status: Optional[InvoiceStatus] = None,
    controller: HotelController = Depends(get_controller)
):
    return controller.invoices.list_invoices(tenant_id, status)


@invoice_router.post("", response_model=InvoiceRecord, status_code=status.HTTP_201_CREATED)
def create_invoice(data: InvoiceCreate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.invoices.create_invoice(data))


@invoice_router.post("/mark-overdue")
def mark_overdue_invoices(controller: HotelController = Depends(get_controller)):
    result = controller.invoices.mark_overdue()
    return {"message": result.message, **unwrap(result)}


@invoice_router.patch("/{invoice_id}/paid", response_model=InvoiceRecord)
def mark_invoice_paid(invoice_id: str, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.invoices.mark_paid(invoice_id))


@invoice_router.delete("/{invoice_id}")
def delete_invoice(invoice_id: str, controller: HotelController = Depends(get_controller)):
    result = controller.invoices.delete_invoice(invoice_id)
    unwrap(result)
    return {"message": result.message}
