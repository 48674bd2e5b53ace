"""
Read-only repository running specifications against one entity type.
"""

from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from webapi.core.specification import Specification

ModelT = TypeVar("ModelT")


class ReadRepository(Generic[ModelT]):
    """Lists and counts entities matching a specification.

    Soft-deleted rows are excluded from every query for models that carry
    the ``is_deleted`` flag.
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model

    def _base_query(self):
        query = self.db.query(self.model)
        if hasattr(self.model, "is_deleted"):
            query = query.filter(self.model.is_deleted.is_(False))
        return query

    def get_by_id(self, entity_id: str) -> Optional[ModelT]:
        return self._base_query().filter(self.model.id == entity_id).first()

    def list(self, spec: Specification) -> List[ModelT]:
        return spec.apply(self._base_query()).all()

    def count(self, spec: Specification) -> int:
        return spec.apply(self._base_query(), paginate=False).count()
