"""Access code administration routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import require_admin
from core.dependencies import AccessCodeStoreDep, ClassManagerDep
from schemas.access_code import AccessCodeInfo, CreateAccessCodeRequest
from schemas.user import User
from utils.class_manager import ClassNotFoundError
from utils.converters import model_to_access_code

router = APIRouter(prefix="/api/access-codes", tags=["Access Code"])


@router.post(
    "",
    response_model=AccessCodeInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Issue an access code",
)
def create_access_code(
    req: CreateAccessCodeRequest,
    access_codes: AccessCodeStoreDep,
    class_manager: ClassManagerDep,
    admin: User = Depends(require_admin),
) -> AccessCodeInfo:
    """Issue a new single-use access code for a class (admin only).

    Raises:
        HTTPException: 404 if the class does not exist.
    """
    try:
        class_model = class_manager.get_class(req.class_id)
    except ClassNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Class not found",
        )
    model = access_codes.create_code(class_model.id, req.price)
    return model_to_access_code(model, class_title=class_model.title)


@router.get("", response_model=List[AccessCodeInfo], summary="List access codes")
def list_access_codes(
    access_codes: AccessCodeStoreDep,
    admin: User = Depends(require_admin),
) -> List[AccessCodeInfo]:
    return [
        model_to_access_code(model, class_title, used_by_name)
        for model, class_title, used_by_name in access_codes.list_codes()
    ]
