# Import all CRUD modules for easier access
from app.crud.member import member_crud
from app.crud.team_contract import team_contract_crud
from app.crud.team import team_crud
from app.crud.role import role_crud
from app.crud.menu import menu_crud
from app.crud.package import package_crud
