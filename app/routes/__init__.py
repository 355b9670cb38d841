# ── Auth ──────────────────────────────────────────────────────
from app.routes.auth_router import router as auth_router

# ── Teams & members ───────────────────────────────────────────
from app.routes.team_router import router as team_router
from app.routes.team_contract_router import router as team_contract_router
from app.routes.member_router import router as member_router

# ── Access configuration ──────────────────────────────────────
from app.routes.role_router import router as role_router
from app.routes.menu_router import router as menu_router
from app.routes.package_router import router as package_router
