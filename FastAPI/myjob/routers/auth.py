import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from myjob.core.errors import AppError
from myjob.database import get_db
from myjob.dependencies import get_current_user
from myjob.models.user import User
from myjob.schemas.auth import (
    AuthCred,
    AuthGetToken,
    CheckCredsResponse,
    EmployerRegister,
    JobSeekerRegister,
    RefreshTokenRequest,
    RegisterResponse,
    RevokeTokenRequest,
    TokenResponse,
    UserInfoResponse,
    UserResponse,
    UserSettingsResponse,
)
from myjob.services.auth_service import (
    check_credentials,
    get_token,
    get_user_info,
    get_user_settings,
    refresh_tokens,
    register_employer,
    register_job_seeker,
    revoke_token,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/job-seeker/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def job_seeker_register(data: JobSeekerRegister, db: Session = Depends(get_db)):
    try:
        user = register_job_seeker(db, data)
        return RegisterResponse(message="Register successfully!", user=UserResponse.model_validate(user))
    except AppError:
        raise
    except Exception as e:
        logger.exception("Job seeker register failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Registration failed") from e


@router.post("/employer/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def employer_register(data: EmployerRegister, db: Session = Depends(get_db)):
    try:
        user = register_employer(db, data)
        return RegisterResponse(message="Register successfully!", user=UserResponse.model_validate(user))
    except AppError:
        raise
    except Exception as e:
        logger.exception("Employer register failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Registration failed") from e


@router.post("/check-creds", response_model=CheckCredsResponse)
def check_creds(data: AuthCred, db: Session = Depends(get_db)):
    """Whether the email is registered, so the client can show login or sign-up."""
    return check_credentials(db, data)


@router.post("/token", response_model=TokenResponse)
def token(data: AuthGetToken, db: Session = Depends(get_db)):
    try:
        return get_token(db, data)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Token issue failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed") from e


@router.post("/token/refresh", response_model=TokenResponse)
def token_refresh(data: RefreshTokenRequest, db: Session = Depends(get_db)):
    return refresh_tokens(db, data.refresh_token)


@router.post("/revoke-token")
def revoke(data: RevokeTokenRequest, _user: User = Depends(get_current_user)):
    revoke_token(data.token)
    return {"message": "Token revoked"}


@router.get("/user-info", response_model=UserInfoResponse)
def user_info(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_user_info(db, user.email)


@router.get("/settings", response_model=UserSettingsResponse)
def user_settings(_user: User = Depends(get_current_user)):
    return get_user_settings()
