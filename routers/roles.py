# routers/roles.py

from fastapi import APIRouter, Depends, HTTPException

from core import access_control
from core.errors import InvalidArgument
from dependencies.auth import get_current_user
from models.enums import Region, Role


router = APIRouter(
    prefix="/roles",
    tags=["Roles"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", summary="Permission matrix for every role")
def list_roles():
    return {
        "roles": [access_control.describe_role(role) for role in Role],
        "regions": Region.list(),
    }


@router.get("/{role}", summary="Permission matrix for one role")
def get_role(role: str):
    try:
        return access_control.describe_role(role)
    except InvalidArgument as e:
        raise HTTPException(400, str(e))
