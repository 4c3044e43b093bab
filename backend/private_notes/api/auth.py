from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from private_notes.api.deps import get_auth_context, require_user
from private_notes.models.auth import (
    LoginRequest,
    ProviderRedirect,
    SignupRequest,
    SignupResponse,
    UserOut,
)
from private_notes.session.context import AuthContext

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(req: SignupRequest, auth: AuthContext = Depends(get_auth_context)):
    result = auth.sign_up(req.email.strip(), req.password)
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)

    user = UserOut(**result.data.to_dict()) if result.data is not None else None
    return SignupResponse(user=user)


@router.post("/login", response_model=UserOut)
def login(req: LoginRequest, auth: AuthContext = Depends(get_auth_context)):
    result = auth.sign_in(req.email.strip(), req.password)
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error)
    return UserOut(**result.data.to_dict())


@router.post("/logout", status_code=204)
def logout(auth: AuthContext = Depends(get_auth_context)) -> None:
    result = auth.sign_out()
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)
    return None


@router.get("/me", response_model=UserOut)
def me(auth: AuthContext = Depends(require_user)):
    return UserOut(**auth.user.to_dict())


@router.get("/oauth", response_model=ProviderRedirect)
def oauth(provider: Optional[str] = None, auth: AuthContext = Depends(get_auth_context)):
    result = auth.sign_in_with_provider(provider)
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)
    return ProviderRedirect(url=result.data)
