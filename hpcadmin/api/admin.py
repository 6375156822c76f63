"""Administrative namespace. Declares no context dependency."""

from fastapi import APIRouter

from hpcadmin.api.models import ServiceInfo
from hpcadmin.config.constants import API_TITLE, SERVICE_VERSION


def admin_router() -> APIRouter:
    router = APIRouter(tags=["admin"])

    @router.get("/", response_model=ServiceInfo, summary="Service information")
    def service_info() -> ServiceInfo:
        return ServiceInfo(name=API_TITLE, version=SERVICE_VERSION)

    return router
