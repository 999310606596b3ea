"""Public catalogue statistics."""

from fastapi import APIRouter

from core.dependencies import ClassManagerDep, TeacherManagerDep, UserManagerDep
from schemas.others import CountResponse

router = APIRouter(prefix="/api/stats", tags=["Stats"])


@router.get("/students", response_model=CountResponse, summary="Count students")
def count_students(user_manager: UserManagerDep) -> CountResponse:
    return CountResponse(count=user_manager.count_students())


@router.get("/teachers", response_model=CountResponse, summary="Count teachers")
def count_teachers(teacher_manager: TeacherManagerDep) -> CountResponse:
    return CountResponse(count=teacher_manager.count_teachers())


@router.get("/classes", response_model=CountResponse, summary="Count classes")
def count_classes(class_manager: ClassManagerDep) -> CountResponse:
    return CountResponse(count=class_manager.count_classes())
