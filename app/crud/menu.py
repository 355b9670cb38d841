from typing import Optional
from sqlalchemy.orm import Session, Query
from app.models import Menu
from app.schemas.menu import MenuCreate, MenuUpdate
from app.crud.base import CRUDBase


class CRUDMenu(CRUDBase[Menu, MenuCreate, MenuUpdate]):
    def list_query(self, db: Session, *, category: Optional[str] = None) -> Query:
        query = self.query_visible(db)
        if category:
            query = query.filter(Menu.category.ilike(category))
        return query


menu_crud = CRUDMenu(Menu)
