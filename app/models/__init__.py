# Import all models here for easier access
from app.models.status import EntityStatus
from app.models.role import Role
from app.models.menu import Menu
from app.models.package import Package
from app.models.team import Team
from app.models.team_contract import TeamContract
from app.models.member import Member
from app.models.member_administration import MemberAdministration
from app.models.member_relative import MemberRelative
from app.models.activity_log import ActivityLog
