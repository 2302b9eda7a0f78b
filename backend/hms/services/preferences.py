"""
UI preferences store
Key/value JSON kept in the ui_state table. Datetimes are written as
YYYY-MM-DDTHH:MM:SS.sssZ and every string of exactly that shape is read back
as an aware UTC datetime.
"""
import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hms.models.tables import UIState

logger = logging.getLogger(__name__)

ISO_UTC_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _revive(value: Any) -> Any:
    if isinstance(value, str) and ISO_UTC_PATTERN.match(value):
        return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ").replace(tzinfo=timezone.utc)
    if isinstance(value, list):
        return [_revive(item) for item in value]
    if isinstance(value, dict):
        return {key: _revive(item) for key, item in value.items()}
    return value


def dumps(value: Any) -> str:
    return json.dumps(value, default=_encode, ensure_ascii=False)


def loads(text: str) -> Any:
    return _revive(json.loads(text))


class PreferencesStore:
    """Preferences store"""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def get(self, key: str, default: Any = None) -> Any:
        db = self._session_factory()
        try:
            row = db.get(UIState, key)
            if row is None:
                return default
            try:
                return loads(row.value)
            except ValueError as e:
                logger.warning(f"Unreadable preference '{key}', using default: {e}")
                return default
        finally:
            db.close()

    def set(self, key: str, value: Any) -> Any:
        """Store value; returns it as it will be read back"""
        text = dumps(value)
        db = self._session_factory()
        try:
            row = db.get(UIState, key)
            if row is None:
                db.add(UIState(key=key, value=text))
            else:
                row.value = text
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.error(f"Could not save preference '{key}'")
            raise
        finally:
            db.close()
        return loads(text)

    def delete(self, key: str) -> bool:
        db = self._session_factory()
        try:
            row = db.get(UIState, key)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True
        finally:
            db.close()

    def all(self) -> Dict[str, Any]:
        db = self._session_factory()
        try:
            result = {}
            for row in db.query(UIState).order_by(UIState.key).all():
                try:
                    result[row.key] = loads(row.value)
                except ValueError as e:
                    logger.warning(f"Skipping unreadable preference '{row.key}': {e}")
            return result
        finally:
            db.close()
