"""
Document routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse
from hms.controller import HotelController, get_controller
from hms.models.enums import DocumentType
from hms.models.schemas import DocumentCreate, DocumentRecord
from hms.routers.common import not_found, unwrap

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.get("", response_model=List[DocumentRecord])
def list_documents(
    type: Optional[DocumentType] = None,
    reference_id: Optional[str] = None,
    controller: HotelController = Depends(get_controller)
):
    """Newest first"""
    return controller.documents.list_documents(type, reference_id)


@router.post("", response_model=DocumentRecord, status_code=status.HTTP_201_CREATED)
def generate_document(data: DocumentCreate, controller: HotelController = Depends(get_controller)):
    return unwrap(controller.documents.generate(data.type, data.booking_id))


@router.post("/preview", response_class=HTMLResponse)
def preview_document(data: DocumentCreate, controller: HotelController = Depends(get_controller)):
    """Render without saving"""
    return unwrap(controller.documents.render(data.type, data.booking_id))["html"]


@router.get("/{document_id}", response_model=DocumentRecord)
def get_document(document_id: str, controller: HotelController = Depends(get_controller)):
    document = controller.documents.get_document(document_id)
    if document is None:
        raise not_found("Document", document_id)
    return document


@router.get("/{document_id}/html", response_class=HTMLResponse)
def get_document_html(document_id: str, controller: HotelController = Depends(get_controller)):
    document = controller.documents.get_document(document_id)
    if document is None:
        raise not_found("Document", document_id)
    return document.content


@router.delete("/{document_id}")
def delete_document(document_id: str, controller: HotelController = Depends(get_controller)):
    result = controller.documents.delete_document(document_id)
    unwrap(result)
    return {"message": result.message}
