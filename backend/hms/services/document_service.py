"""
Document service
Renders receipts, tax invoices and booking confirmations from a booking,
its guest and room, and files them through the gateway.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from hms.config import settings
from hms.domain.booking_rules import count_nights
from hms.models.enums import DocumentType, ErrorCode
from hms.models.schemas import DocumentRecord
from hms.services.base import HotelService, serialized
from hms.services.thai_format import amount_to_thai_words, buddhist_long_date, buddhist_short_date
from hms_core.ai.result import ActionResult, AffectedEntity

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates" / "documents"

CENT = Decimal("0.01")


@dataclass(frozen=True)
class DocumentKind:
    template: str
    number_prefix: str
    title: str


DOCUMENT_KINDS = {
    DocumentType.RECEIPT: DocumentKind("receipt.html.j2", "VP-RCPT", "Receipt"),
    DocumentType.TAX_INVOICE: DocumentKind("tax_invoice.html.j2", "VP-TINV", "Tax Invoice"),
    DocumentType.BOOKING_CONFIRMATION: DocumentKind("booking_confirmation.html.j2", "VP-BKG", "Booking Confirmation"),
}


def split_vat(total: Decimal, rate: Decimal) -> tuple:
    """(amount before VAT, VAT) for a VAT-inclusive total"""
    total = Decimal(total)
    before_vat = (total / (1 + Decimal(rate))).quantize(CENT, rounding=ROUND_HALF_UP)
    return before_vat, (total - before_vat).quantize(CENT, rounding=ROUND_HALF_UP)


def _money(value) -> str:
    return f"{Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"


def build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        undefined=StrictUndefined,
        autoescape=select_autoescape(["html", "j2"]),
        keep_trailing_newline=True,
    )
    env.filters["money"] = _money
    env.filters["be_short"] = buddhist_short_date
    env.filters["be_long"] = buddhist_long_date
    return env


class DocumentService(HotelService):
    """Document service"""

    entity_type = "Document"

    def __init__(self, state, gateway, lock=None):
        super().__init__(state, gateway, lock)
        self.env = build_environment()

    def list_documents(
        self,
        doc_type: Optional[DocumentType] = None,
        reference_id: Optional[str] = None,
    ) -> List[DocumentRecord]:
        """Newest first"""
        documents = self.state.documents
        if doc_type:
            documents = [d for d in documents if d.type == doc_type]
        if reference_id:
            documents = [d for d in documents if d.reference_id == reference_id]
        return sorted(documents, key=lambda d: (d.created_at, d.id), reverse=True)

    def get_document(self, document_id: str) -> Optional[DocumentRecord]:
        return self.state.find("documents", document_id)

    def render(self, doc_type: DocumentType, booking_id: str, today: Optional[date] = None) -> ActionResult:
        """Render without filing; data carries title and html"""
        booking = self.state.find("bookings", booking_id)
        if booking is None:
            return self._not_found(booking_id, "Booking")
        guest = self.state.find("guests", booking.guest_id)
        room = self.state.find("rooms", booking.room_id)
        if guest is None or room is None:
            return ActionResult.fail(
                f"Booking {booking_id} refers to a missing guest or room",
                error_code=ErrorCode.NOT_FOUND,
                entity_type="Booking",
                entity_id=booking_id,
            )

        kind = DOCUMENT_KINDS[doc_type]
        total = Decimal(booking.total_price)
        before_vat, vat = split_vat(total, settings.VAT_RATE)
        context = {
            "company": {
                "name": settings.COMPANY_NAME,
                "legal_name": settings.COMPANY_LEGAL_NAME,
                "address": settings.COMPANY_ADDRESS,
                "phone": settings.COMPANY_PHONE,
                "tax_id": settings.COMPANY_TAX_ID,
            },
            "document_number": f"{kind.number_prefix}-{booking.id}",
            "issued_on": today or date.today(),
            "booking": booking,
            "guest": guest,
            "room": room,
            "nights": count_nights(booking.check_in_date, booking.check_out_date),
            "total": total,
            "before_vat": before_vat,
            "vat": vat,
            "vat_percent": (Decimal(settings.VAT_RATE) * 100).normalize(),
            "amount_in_words": amount_to_thai_words(total),
        }
        html = self.env.get_template(kind.template).render(**context)
        return ActionResult.ok(
            f"{kind.title} {context['document_number']} rendered",
            entity_type="Document",
            data={"title": f"{kind.title} {context['document_number']}", "html": html},
        )

    @serialized
    def generate(self, doc_type: DocumentType, booking_id: str, today: Optional[date] = None) -> ActionResult:
        rendered = self.render(doc_type, booking_id, today=today)
        if not rendered.success:
            return rendered

        created = self.gateway.documents.create({
            "type": doc_type,
            "title": rendered.data["title"],
            "content": rendered.data["html"],
            "reference_id": booking_id,
            "created_at": datetime.utcnow(),
        })
        if not created.success:
            return self._gateway_failure(created)

        self.state.upsert("documents", created.data)
        logger.info(f"{doc_type.value} {created.data.id} generated for booking {booking_id}")
        return self._done(f"{rendered.data['title']} generated", created.data, "created")

    @serialized
    def delete_document(self, document_id: str) -> ActionResult:
        if self.get_document(document_id) is None:
            return self._not_found(document_id)
        deleted = self.gateway.documents.delete(document_id)
        if not deleted.success:
            return self._gateway_failure(deleted)
        self.state.remove("documents", document_id)
        return ActionResult.ok(
            f"Document {document_id} deleted",
            entity_type="Document",
            entity_id=document_id,
            affected_entities=[AffectedEntity("Document", document_id, "deleted")],
        )
