import os
import time
from typing import Any, Dict

import jwt

ALG = os.getenv("JWT_ALG", "HS256")
SECRET = os.environ.get("JWT_SECRET", "change_me")
ACCESS_TTL = int(os.getenv("JWT_ACCESS_TTL_SECONDS", "3600"))
ACCESS_TYPE = "access"


def mint_access(user_id: str, ttl: int = ACCESS_TTL) -> str:
    now = int(time.time())
    claims = {"sub": user_id, "iat": now, "exp": now + ttl, "typ": ACCESS_TYPE}
    return jwt.encode(claims, SECRET, algorithm=ALG)


def decode_token(tok: str) -> Dict[str, Any]:
    return jwt.decode(tok, SECRET, algorithms=[ALG], options={"require": ["exp", "sub"]})


def access_subject(tok: str) -> str:
    """User id carried by an access token. Raises jwt.PyJWTError otherwise."""
    data = decode_token(tok)
    if data.get("typ") != ACCESS_TYPE or not data.get("sub"):
        raise jwt.InvalidTokenError("not_an_access_token")
    return str(data["sub"])
