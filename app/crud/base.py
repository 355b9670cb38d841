from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy.orm import Session, Query

from app.database.session import Base
from app.models.status import EntityStatus
from app.utils.pagination import ListQueryParams, exclude_non_active, paginate_query

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def parse_id(raw: Any) -> Optional[int]:
    """Path ids arrive as text; anything that is not a positive integer matches nothing."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Base class for CRUD operations.

    Rows are never removed: `soft_delete` flips status to non-active and every
    read goes through the model's visibility predicate. Writes only flush when
    `commit=False` so callers can group several of them into one transaction.
    """
    def __init__(self, model: Type[ModelType], visibility: Callable = exclude_non_active):
        self.model = model
        self.visibility = visibility

    def query_visible(self, db: Session) -> Query:
        return db.query(self.model).filter(self.visibility(self.model))

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        """
        Get an object by ID, whatever its status
        """
        id = parse_id(id)
        if id is None:
            return None
        return db.query(self.model).filter(self.model.id == id).first()

    def get_visible(self, db: Session, id: Any) -> Optional[ModelType]:
        id = parse_id(id)
        if id is None:
            return None
        return self.query_visible(db).filter(self.model.id == id).first()

    def get_multi(
        self,
        db: Session,
        *,
        params: ListQueryParams,
        query: Optional[Query] = None,
    ) -> Tuple[int, List[ModelType]]:
        """
        Get one page of visible objects plus the total count under the same filter
        """
        if query is None:
            query = self.query_visible(db)
        return paginate_query(query, params)

    def _save(self, db: Session, db_obj: ModelType, commit: bool) -> ModelType:
        db.add(db_obj)
        if commit:
            db.commit()
            db.refresh(db_obj)
        else:
            db.flush()
        return db_obj

    def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]], commit: bool = True, **extra: Any) -> ModelType:
        """
        Create a new, active object
        """
        obj_in_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        obj_in_data = {**obj_in_data, **extra}
        obj_in_data.setdefault("status", EntityStatus.ACTIVE.value)
        db_obj = self.model(**obj_in_data)
        return self._save(db, db_obj, commit)

    def update(self, db: Session, *, db_obj: ModelType, obj_in: Union[UpdateSchemaType, Dict[str, Any]], commit: bool = True) -> ModelType:
        """
        Update the fields present in obj_in, leaving the rest untouched.
        A null sent for a NOT NULL column leaves that column as it is.
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        columns = self.model.__table__.columns
        for field, value in update_data.items():
            if not hasattr(self.model, field) or field in ("id", "status", "created_at", "updated_at"):
                continue
            if value is None and field in columns and not columns[field].nullable:
                continue
            setattr(db_obj, field, value)

        return self._save(db, db_obj, commit)

    def soft_delete(self, db: Session, *, db_obj: ModelType, commit: bool = True) -> ModelType:
        db_obj.status = EntityStatus.NON_ACTIVE.value
        return self._save(db, db_obj, commit)
