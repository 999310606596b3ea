"""Enrollment routes: access code redemption, free enrollment and access checks."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_user
from core.dependencies import FreeEnrollmentServiceDep, RedemptionServiceDep
from core.exceptions import (
    AlreadyEnrolledError,
    ClassNotFoundOrNotFreeError,
    InvalidOrUsedCodeError,
    StoreError,
)
from schemas.enrollment import (
    CheckAccessResponse,
    EnrolledClassInfo,
    EnrollFreeRequest,
    EnrollmentResponse,
    RedeemCodeRequest,
)
from schemas.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Enrollment"])


@router.post("/redeem-code", response_model=EnrollmentResponse, summary="Redeem an access code")
def redeem_code(
    req: RedeemCodeRequest,
    redemption: RedemptionServiceDep,
    current_user: User = Depends(get_current_user),
) -> EnrollmentResponse:
    """Redeem an access code and unlock its class for the current user.

    Args:
        req: Request with the access code.
        redemption: Injected RedemptionService instance.
        current_user: Current authenticated user.

    Returns:
        EnrollmentResponse with the unlocked class ID.

    Raises:
        HTTPException: 400 for an invalid/used code or an existing
            enrollment, 500 if the database failed.
    """
    try:
        result = redemption.redeem(current_user.id, req.code)
    except InvalidOrUsedCodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or already used code",
        )
    except AlreadyEnrolledError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You already have access to this class",
        )
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        )
    return EnrollmentResponse(
        message="Code redeemed successfully!", class_id=result.class_id
    )


@router.post("/enroll-free", response_model=EnrollmentResponse, summary="Enroll in a free class")
def enroll_free(
    req: EnrollFreeRequest,
    enrollment: FreeEnrollmentServiceDep,
    current_user: User = Depends(get_current_user),
) -> EnrollmentResponse:
    """Enroll the current user in a free class.

    Raises:
        HTTPException: 400 for a missing/paid class or an existing
            enrollment, 500 if the database failed.
    """
    try:
        result = enrollment.enroll_free(current_user.id, req.class_id)
    except ClassNotFoundOrNotFreeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Class not found or not free",
        )
    except AlreadyEnrolledError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Already enrolled in this class",
        )
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        )
    return EnrollmentResponse(message="Enrolled successfully!", class_id=result.class_id)


@router.get("/my-classes", response_model=List[EnrolledClassInfo], summary="List my classes")
def my_classes(
    enrollment: FreeEnrollmentServiceDep,
    current_user: User = Depends(get_current_user),
) -> List[EnrolledClassInfo]:
    return enrollment.list_my_classes(current_user.id)


@router.get(
    "/check-access/{class_id}",
    response_model=CheckAccessResponse,
    summary="Check access to a class",
)
def check_access(
    class_id: int,
    enrollment: FreeEnrollmentServiceDep,
    current_user: User = Depends(get_current_user),
) -> CheckAccessResponse:
    return CheckAccessResponse(has_access=enrollment.has_access(current_user.id, class_id))
