from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jwt import PyJWTError
from capsule_closet.auth.jwt import access_subject

bearer = HTTPBearer(auto_error=False)


def get_current_user_id(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> str:
    if not creds:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized")
    try:
        return access_subject(creds.credentials)
    except PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized")


def get_user_id_optional(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Optional[str]:
    """Like get_current_user_id, but anonymous or bad tokens give None."""
    if not creds:
        return None
    try:
        return access_subject(creds.credentials)
    except PyJWTError:
        return None
