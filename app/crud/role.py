from typing import Optional
from sqlalchemy.orm import Session, Query
from app.models import Role
from app.schemas.role import RoleCreate, RoleUpdate
from app.crud.base import CRUDBase
from app.utils.pagination import only_active


class CRUDRole(CRUDBase[Role, RoleCreate, RoleUpdate]):
    def list_query(
        self, db: Session, *, name: Optional[str] = None, description: Optional[str] = None
    ) -> Query:
        query = self.query_visible(db)
        if name:
            query = query.filter(Role.name.ilike(f"%{name}%"))
        if description:
            query = query.filter(Role.description.ilike(f"%{description}%"))
        return query


# Roles are listed only while exactly "active"
role_crud = CRUDRole(Role, visibility=only_active)
