import logging
from datetime import date, datetime
from sqlalchemy.orm import Session
from app.models import Member, MemberAdministration, MemberRelative, Menu, Package, Role, Team, TeamContract
from app.models.status import EntityStatus
from common_utils import generate_numeric_uid
from common_utils.auth.utils import hash_password

logger = logging.getLogger(__name__)

ACTIVE = EntityStatus.ACTIVE.value

DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_ADMIN_PASSWORD = "1234"


def seed_roles(db: Session):
    """
    Seed the Admin and User roles (idempotent). Admin must come first so it gets id 1.
    """
    roles_data = [
        {
            "name": "Admin",
            "description": "Administrator with full access",
            "authorized_menu": {},
        },
        {
            "name": "User",
            "description": "Regular user with limited access",
            "authorized_menu": ["Dashboard"],
        },
    ]

    for data in roles_data:
        if db.query(Role).filter(Role.name == data["name"]).first():
            logger.info(f"Role {data['name']} already exists, skipping.")
            continue
        db.add(Role(status=ACTIVE, **data))
        db.flush()
        logger.info(f"Role {data['name']} created.")

    db.commit()


def seed_menus(db: Session):
    menus_data = [
        {"name": "Teams", "description": "View overall stats and metrics", "url_menu": "/teams",
         "icon_menu": "dashboard-icon", "ordering_number": 1},
        {"name": "Package", "description": "Manage packages", "url_menu": "/packages",
         "icon_menu": "package-icon", "ordering_number": 2},
        {"name": "Menu", "description": "Manage menus", "url_menu": "/menus",
         "icon_menu": "menu-icon", "ordering_number": 3},
        {"name": "Roles", "description": "Manage roles", "url_menu": "/roles",
         "icon_menu": "roles-icon", "ordering_number": 4},
    ]

    for data in menus_data:
        if db.query(Menu).filter(Menu.url_menu == data["url_menu"]).first():
            logger.info(f"Menu {data['url_menu']} already exists, skipping.")
            continue
        db.add(Menu(category="Main", parent_menu={}, status=ACTIVE, **data))
        logger.info(f"Menu {data['name']} created.")

    db.commit()


def seed_packages(db: Session):
    menu_ids = [menu.id for menu in db.query(Menu).order_by(Menu.ordering_number).all()]
    packages_data = [
        {
            "name": "Basic Package",
            "description": "Access to basic features",
            "image_url": "/images/basic-package.png",
            "selected_menu": menu_ids[:2],
        },
        {
            "name": "Premium Package",
            "description": "Access to all features",
            "image_url": "/images/premium-package.png",
            "selected_menu": menu_ids,
        },
    ]

    for data in packages_data:
        if db.query(Package).filter(Package.name == data["name"]).first():
            logger.info(f"Package {data['name']} already exists, skipping.")
            continue
        db.add(Package(status=ACTIVE, **data))
        logger.info(f"Package {data['name']} created.")

    db.commit()


def seed_team(db: Session):
    """
    Seed the development team with its contract and the default admin member.
    """
    team = db.query(Team).filter(Team.team_name == "Development Team").first()
    if not team:
        team = Team(
            team_name="Development Team",
            company_name="Tech Solutions Ltd.",
            hq_address="123 Main Street, Cityville",
            manager_first_name="John",
            manager_last_name="Doe",
            manager_full_name="John Doe",
            manager_email="john.doe@techsolutions.com",
            manager_phone="1234567890",
            image_url="/images/development-team.png",
            status=ACTIVE,
        )
        db.add(team)
        db.flush()
        logger.info(f"Team {team.team_name} created.")

    package = db.query(Package).order_by(Package.id).first()
    if package and not db.query(TeamContract).filter(TeamContract.contract_number == "DEV-2025-001").first():
        db.add(TeamContract(
            contract_number="DEV-2025-001",
            team_id=team.id,
            active_period_start=datetime(2025, 1, 1),
            active_period_end=datetime(2025, 12, 31),
            member_quota=15,
            package_id=package.id,
            status=ACTIVE,
        ))
        logger.info("Contract DEV-2025-001 created.")

    admin_role = db.query(Role).filter(Role.name == "Admin").first()
    if admin_role and not db.query(Member).filter(Member.email == DEFAULT_ADMIN_EMAIL).first():
        member = Member(
            uid=generate_numeric_uid(),
            email=DEFAULT_ADMIN_EMAIL,
            password=hash_password(DEFAULT_ADMIN_PASSWORD),
            phone_number="0987654321",
            first_name="Admin",
            last_name="User",
            full_name="Admin User",
            name="Admin User",
            employee_number="EMP001",
            joined_date=date(2023, 1, 1),
            home_address="789 Main Street, Cityville",
            district="Downtown",
            sub_district="North District",
            birth_place="Cityville",
            birth_date=date(1990, 1, 1),
            gender="Male",
            nationality="Countryland",
            religion="None",
            team_id=team.id,
            role_id=admin_role.id,
            status=ACTIVE,
        )
        member.administration = MemberAdministration(tax_number="TAX-1234", card_number="CARD-5678")
        member.relatives = [
            MemberRelative(full_name="Jane Doe", relation_type="Spouse", phone_number="9876543210", is_emergency=True)
        ]
        db.add(member)
        logger.info(f"Member {DEFAULT_ADMIN_EMAIL} created.")

    db.commit()


def seed_all(db: Session):
    seed_roles(db)
    seed_menus(db)
    seed_packages(db)
    seed_team(db)
    logger.info("Database seeding completed successfully.")
