from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog_api.core.errors import CatalogError


def supplied_fields(payload: BaseModel) -> dict[str, Any]:
    """Fields the client actually sent with a value; everything else keeps its stored value."""
    return payload.model_dump(exclude_unset=True, exclude_none=True)


class BaseService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def commit(self, on_conflict: Optional[Callable[[], CatalogError]] = None) -> None:
        """
        End the unit of work.

        The uniqueness pre-checks run in the same session, but a concurrent writer
        can still win the race; the database constraint then rejects the write and
        the caller-supplied conflict error is raised instead of the IntegrityError.
        """
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if on_conflict is None:
                raise
            raise on_conflict() from e
        except Exception:
            self.db.rollback()
            raise
