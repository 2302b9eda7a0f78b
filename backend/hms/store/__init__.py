"""
hms.store - the table-per-sheet store behind the CRUD gateway
"""
from hms.store.sheet_store import SheetStore, SHEETS

__all__ = ["SheetStore", "SHEETS"]
