import os
from datetime import datetime,timedelta,timezone
from jose import jwt,JWTError


def _secret() -> str:
    return os.getenv("JWT_SECRET","dev_secret_change_me")


def _algorithm() -> str:
    return os.getenv("JWT_ALG","HS256")


def create_access_token(subject: str) -> str:
    exp_min = int(os.getenv("ACCESS_TOKEN_EXPIRE_MIN", "60"))  # minutes; default 1h

    now = datetime.now(timezone.utc)

    payload = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=exp_min)).timestamp())
    }

    return jwt.encode(payload,_secret(),algorithm=_algorithm())


def decode_access_token(token:str) -> dict:
    try:
        return jwt.decode(token,_secret(),algorithms=[_algorithm()])
    except JWTError as e:
        raise ValueError("Invalid token") from e


def token_subject(payload: dict) -> str | None:
    # tokens minted by the legacy Node backend carry the user id as "id"
    return payload.get("sub") or payload.get("id")
