"""Administrator management of student accounts."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import require_admin
from core.dependencies import UserManagerDep
from schemas.others import SuccessResponse
from schemas.user import StudentPatch, User
from utils.user_manager import UserAlreadyExistsError, UserNotFoundError

router = APIRouter(
    prefix="/api/admin/students",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=List[User], summary="List students")
def list_students(user_manager: UserManagerDep) -> List[User]:
    return user_manager.list_students()


@router.put("/{student_id}", response_model=User, summary="Update a student")
def update_student(
    student_id: int, patch: StudentPatch, user_manager: UserManagerDep
) -> User:
    """Apply a partial update to a student account.

    Raises:
        HTTPException: 400 for an empty patch or an email taken by another
            user, 404 for an unknown student.
    """
    try:
        return user_manager.update_student(student_id, patch)
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )
    except UserAlreadyExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )


@router.delete("/{student_id}", response_model=SuccessResponse, summary="Delete a student")
def delete_student(student_id: int, user_manager: UserManagerDep) -> SuccessResponse:
    try:
        user_manager.delete_student(student_id)
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )
    return SuccessResponse()
