"""Class management routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import require_admin
from core.dependencies import ClassManagerDep, TeacherManagerDep
from schemas.class_schema import ClassInfo, ClassPatch, CreateClassRequest
from schemas.others import SuccessResponse
from schemas.user import User
from utils.class_manager import ClassNotFoundError, EmptyPatchError
from utils.converters import model_to_class
from utils.teacher_manager import TeacherNotFoundError

router = APIRouter(prefix="/api/classes", tags=["Class"])


@router.get("", response_model=List[ClassInfo], summary="List classes")
def list_classes(
    class_manager: ClassManagerDep,
    teacher_id: Optional[int] = None,
) -> List[ClassInfo]:
    return [
        model_to_class(model, teacher_name)
        for model, teacher_name in class_manager.list_classes(teacher_id=teacher_id)
    ]


@router.post(
    "",
    response_model=ClassInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Create a class",
)
def create_class(
    req: CreateClassRequest,
    class_manager: ClassManagerDep,
    teacher_manager: TeacherManagerDep,
    admin: User = Depends(require_admin),
) -> ClassInfo:
    """Create a class (admin only). A zero price makes the class free.

    Raises:
        HTTPException: 404 if the teacher does not exist.
    """
    try:
        teacher = teacher_manager.get_teacher(req.teacher_id)
    except TeacherNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Teacher not found",
        )
    class_model = class_manager.create_class(req)
    return model_to_class(class_model, teacher.name)


@router.put("/{class_id}", response_model=ClassInfo, summary="Update a class")
def update_class(
    class_id: int,
    patch: ClassPatch,
    class_manager: ClassManagerDep,
    admin: User = Depends(require_admin),
) -> ClassInfo:
    """Apply a partial update to a class (admin only).

    Raises:
        HTTPException: 400 for an empty patch, 404 for an unknown class.
    """
    try:
        class_model = class_manager.update_class(class_id, patch)
    except EmptyPatchError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )
    except ClassNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Class not found",
        )
    return model_to_class(class_model, class_manager.teacher_name(class_model))


@router.delete("/{class_id}", response_model=SuccessResponse, summary="Delete a class")
def delete_class(
    class_id: int,
    class_manager: ClassManagerDep,
    admin: User = Depends(require_admin),
) -> SuccessResponse:
    try:
        class_manager.delete_class(class_id)
    except ClassNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Class not found",
        )
    return SuccessResponse()
