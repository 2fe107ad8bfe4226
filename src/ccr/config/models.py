"""Pydantic models for the router config file consumed by ``ccr start``.

Keys keep the spelling of the config file (``Providers``, ``OPENAI_API_KEY``,
``PROXY_URL``, ...); attributes use snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ccr.core.interface.config import ProviderConfig


class RouterSettings(BaseModel):
    """Routing section. Only ``default`` (``"provider,model"``) is consumed."""

    model_config = ConfigDict(extra="allow")

    default: str | None = None

    @model_validator(mode="after")
    def _validate_default(self) -> RouterSettings:
        if self.default is not None and "," not in self.default:
            msg = "Router.default must look like 'provider,model'"
            raise ValueError(msg)
        return self


class TelemetrySettings(BaseModel):
    """``Telemetry`` section: where ``proxy.dispatch`` spans are exported."""

    enabled: bool = False
    service_name: str = "ccr"
    console: bool = True
    otlp_endpoint: str | None = None


class ProxySettings(BaseModel):
    """Top-level router configuration."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    providers: list[ProviderConfig] = Field(default_factory=list, alias="Providers")
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(default=None, alias="OPENAI_BASE_URL")
    openai_model: str | None = Field(default=None, alias="OPENAI_MODEL")
    proxy_url: str | None = Field(default=None, alias="PROXY_URL")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=3456, alias="PORT")
    log: bool = Field(default=False, alias="LOG")
    router: RouterSettings | None = Field(default=None, alias="Router")
    timeout_seconds: float = 600.0
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings, alias="Telemetry")

    @model_validator(mode="after")
    def _validate_providers(self) -> ProxySettings:
        seen: set[str] = set()
        for provider in self.providers:
            if provider.name in seen:
                msg = f"duplicate provider name '{provider.name}'"
                raise ValueError(msg)
            seen.add(provider.name)
        return self
