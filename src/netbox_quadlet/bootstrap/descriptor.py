"""Connection details reported at the end of a bootstrap."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from ..config import StackConfig
from .secrets import StackSecrets


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Everything a client needs to reach the new NetBox instance."""

    url: str
    username: str
    password: str
    api_url: str
    db_host: str
    db_port: int
    db_name: str
    db_user: str
    db_password: str
    redis_host: str
    redis_port: int
    redis_password: str
    redis_cache_host: str
    redis_cache_port: int
    redis_cache_password: str
    secret_key: str
    api_token_pepper: str

    @classmethod
    def build(
        cls, config: StackConfig, secrets: StackSecrets, bind_address: str
    ) -> ConnectionDescriptor:
        url = f"http://{bind_address}:{config.http_port}"
        return cls(
            url=url,
            username=config.admin_username,
            password=secrets.admin_password,
            api_url=f"{url}/api",
            db_host=config.db_host,
            db_port=config.db_port,
            db_name=config.db_name,
            db_user=config.db_user,
            db_password=secrets.db_password,
            redis_host=config.redis_host,
            redis_port=config.redis_port,
            redis_password=secrets.redis_password,
            redis_cache_host=config.redis_cache_host,
            redis_cache_port=config.redis_cache_port,
            redis_cache_password=secrets.redis_cache_password,
            secret_key=secrets.secret_key,
            api_token_pepper=secrets.api_token_pepper,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
