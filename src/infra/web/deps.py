import secrets

from fastapi import Depends, Header, HTTPException, status

from infra.config.config import Config, get_config


def require_api_key(
    x_api_key: str | None = Header(default=None),
    config: Config = Depends(get_config),
) -> None:
    expected_api_key = config.API_KEY

    if (
        not x_api_key
        or not expected_api_key
        or not secrets.compare_digest(x_api_key.encode("utf-8"), expected_api_key.encode("utf-8"))
    ):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
