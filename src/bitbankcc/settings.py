from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SecretStr


class ProxySettings(BaseModel):
    enabled: bool = False
    url: str | None = None
    username: str | None = None
    password: SecretStr | None = None

    model_config = {"extra": "forbid"}


class HttpSettings(BaseModel):
    timeout: float = Field(default=10.0, gt=0)
    user_agent: str = "bitbankcc-python/0.1"

    model_config = {"extra": "forbid"}


class ApiCredentials(BaseModel):
    api_key: SecretStr
    api_secret: SecretStr

    model_config = {"extra": "forbid"}


class Settings(BaseModel):
    env: str = "dev"
    credentials: ApiCredentials | None = None
    http: HttpSettings = Field(default_factory=HttpSettings)
    proxy: ProxySettings = Field(default_factory=ProxySettings)

    model_config = {"extra": "forbid"}

    def secret_values(self) -> list[str]:
        """Plain secret strings, for log masking."""
        values: list[str] = []
        if self.credentials is not None:
            values.append(self.credentials.api_key.get_secret_value())
            values.append(self.credentials.api_secret.get_secret_value())
        if self.proxy.password is not None:
            values.append(self.proxy.password.get_secret_value())
        return [v for v in values if v]

    def redacted(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        creds = data.get("credentials")
        if isinstance(creds, dict):
            for name in ("api_key", "api_secret"):
                if name in creds:
                    creds[name] = "***"
        proxy = data.get("proxy")
        if isinstance(proxy, dict) and proxy.get("password") is not None:
            proxy["password"] = "***"
        return data
