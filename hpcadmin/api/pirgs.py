# hpcadmin/api/pirgs.py

from typing import List

from fastapi import APIRouter, Response, status

from hpcadmin.api.models import ErrorResponse
from hpcadmin.core.context import Context, connection_from
from hpcadmin.data import pirgs as pirgs_data
from hpcadmin.data.models import MemberRequest, Pirg, PirgCreate, PirgUpdate

_ERRORS = {
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


def pirgs_router(ctx: Context) -> APIRouter:
    """Build the pirgs resource router from the bound context."""
    engine = connection_from(ctx)
    router = APIRouter(tags=["pirgs"], responses=_ERRORS)

    @router.get("/", response_model=List[Pirg], summary="List pirgs")
    def list_pirgs() -> List[Pirg]:
        return pirgs_data.list_pirgs(engine)

    @router.post(
        "/",
        response_model=Pirg,
        status_code=status.HTTP_201_CREATED,
        summary="Create pirg",
    )
    def create_pirg(payload: PirgCreate) -> Pirg:
        return pirgs_data.create_pirg(engine, payload)

    @router.get("/{pirg_id}", response_model=Pirg, summary="Get pirg")
    def get_pirg(pirg_id: int) -> Pirg:
        return pirgs_data.get_pirg(engine, pirg_id)

    @router.put("/{pirg_id}", response_model=Pirg, summary="Update pirg")
    def update_pirg(pirg_id: int, payload: PirgUpdate) -> Pirg:
        return pirgs_data.update_pirg(engine, pirg_id, payload)

    @router.delete(
        "/{pirg_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        summary="Delete pirg",
    )
    def delete_pirg(pirg_id: int) -> Response:
        pirgs_data.delete_pirg(engine, pirg_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    @router.get("/{pirg_id}/members", response_model=List[int], summary="List pirg members")
    def list_members(pirg_id: int) -> List[int]:
        return pirgs_data.list_members(engine, pirg_id)

    @router.post(
        "/{pirg_id}/members",
        response_model=Pirg,
        status_code=status.HTTP_201_CREATED,
        summary="Add pirg member",
    )
    def add_member(pirg_id: int, payload: MemberRequest) -> Pirg:
        return pirgs_data.add_member(engine, pirg_id, payload.user_id)

    @router.delete(
        "/{pirg_id}/members/{user_id}",
        response_model=Pirg,
        summary="Remove pirg member",
    )
    def remove_member(pirg_id: int, user_id: int) -> Pirg:
        return pirgs_data.remove_member(engine, pirg_id, user_id)

    return router
