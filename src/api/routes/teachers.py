"""Teacher routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import require_admin
from core.dependencies import TeacherManagerDep
from schemas.others import SuccessResponse
from schemas.teacher import CreateTeacherRequest, Teacher
from schemas.user import User
from utils.converters import model_to_teacher
from utils.teacher_manager import TeacherNotFoundError

router = APIRouter(prefix="/api/teachers", tags=["Teacher"])


@router.get("", response_model=List[Teacher], summary="List teachers")
def list_teachers(teacher_manager: TeacherManagerDep) -> List[Teacher]:
    return [model_to_teacher(model) for model in teacher_manager.list_teachers()]


@router.get("/{teacher_id}", response_model=Teacher, summary="Get a teacher")
def get_teacher(teacher_id: int, teacher_manager: TeacherManagerDep) -> Teacher:
    try:
        return model_to_teacher(teacher_manager.get_teacher(teacher_id))
    except TeacherNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Teacher not found",
        )


@router.post(
    "",
    response_model=Teacher,
    status_code=status.HTTP_201_CREATED,
    summary="Create a teacher",
)
def create_teacher(
    req: CreateTeacherRequest,
    teacher_manager: TeacherManagerDep,
    admin: User = Depends(require_admin),
) -> Teacher:
    """Create a teacher profile (admin only).

    Raises:
        HTTPException: 400 if name or subject is missing.
    """
    try:
        model = teacher_manager.create_teacher(
            name=req.name, subject=req.subject, bio=req.bio, photo=req.photo
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )
    return model_to_teacher(model)


@router.delete("/{teacher_id}", response_model=SuccessResponse, summary="Delete a teacher")
def delete_teacher(
    teacher_id: int,
    teacher_manager: TeacherManagerDep,
    admin: User = Depends(require_admin),
) -> SuccessResponse:
    try:
        teacher_manager.delete_teacher(teacher_id)
    except TeacherNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Teacher not found",
        )
    return SuccessResponse()
