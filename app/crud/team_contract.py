from typing import Optional
from sqlalchemy.orm import Session, Query
from app.models import TeamContract
from app.schemas.team_contract import TeamContractCreate, TeamContractUpdate
from app.crud.base import CRUDBase, parse_id


class CRUDTeamContract(CRUDBase[TeamContract, TeamContractCreate, TeamContractUpdate]):
    def list_query(self, db: Session, *, team_id: int) -> Query:
        return self.query_visible(db).filter(TeamContract.team_id == team_id)

    def get_for_team(self, db: Session, *, team_id: int, contract_id) -> Optional[TeamContract]:
        contract_id = parse_id(contract_id)
        if contract_id is None:
            return None
        return self.list_query(db, team_id=team_id).filter(TeamContract.id == contract_id).first()


team_contract_crud = CRUDTeamContract(TeamContract)
