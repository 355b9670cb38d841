from typing import Optional
from sqlalchemy.orm import Session, Query
from app.models import Package
from app.schemas.package import PackageCreate, PackageUpdate
from app.crud.base import CRUDBase


class CRUDPackage(CRUDBase[Package, PackageCreate, PackageUpdate]):
    def list_query(self, db: Session, *, name: Optional[str] = None) -> Query:
        query = self.query_visible(db)
        if name:
            query = query.filter(Package.name.ilike(f"%{name}%"))
        return query


package_crud = CRUDPackage(Package)
