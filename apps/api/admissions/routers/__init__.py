"""API routers."""

from admissions.routers.admissions import router as admissions_router
from admissions.routers.auth import router as auth_router
from admissions.routers.campaigns import router as campaigns_router
from admissions.routers.communications import router as communications_router
from admissions.routers.forms import router as forms_router
from admissions.routers.forms_public import router as forms_public_router
from admissions.routers.internal import router as internal_router
from admissions.routers.metrics import router as metrics_router
from admissions.routers.prospects import router as prospects_router
from admissions.routers.reports import router as reports_router
from admissions.routers.students import router as students_router

__all__ = [
    "admissions_router",
    "auth_router",
    "campaigns_router",
    "communications_router",
    "forms_router",
    "forms_public_router",
    "internal_router",
    "metrics_router",
    "prospects_router",
    "reports_router",
    "students_router",
]
