"""Pydantic models for the SES transport (connection config and send result)."""

from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

SES_API_VERSION = "2010-12-01"
DEFAULT_REGION = "us-east-1"
MESSAGE_ID_DOMAIN = "email.amazonses.com"

# Keyword arguments aiobotocore's create_client accepts besides credentials/region/endpoint
CLIENT_PASSTHROUGH_KEYS = ("use_ssl", "verify", "config")


class TransportConfig(BaseModel):
    """Normalized SES connection parameters; immutable once built."""

    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None
    api_version: str = SES_API_VERSION
    region: str = DEFAULT_REGION
    endpoint_url: Optional[str] = None
    # unrecognized options, kept verbatim (read-only view)
    extra: Mapping[str, Any] = Field(default_factory=lambda: MappingProxyType({}))

    class Config:
        frozen = True

    @field_validator("extra", mode="after")
    @classmethod
    def freeze_extra(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    def __hash__(self) -> int:
        # extra values may be unhashable (botocore Config, lists); keys suffice
        return hash((
            self.access_key_id,
            self.secret_access_key,
            self.session_token,
            self.api_version,
            self.region,
            self.endpoint_url,
            tuple(sorted(self.extra)),
        ))

    def to_client_kwargs(self) -> dict[str, Any]:
        """Build kwargs for ``AioSession.create_client("ses", **kwargs)``."""
        kwargs: dict[str, Any] = {
            "region_name": self.region,
            "api_version": self.api_version,
        }
        if self.access_key_id:
            kwargs["aws_access_key_id"] = self.access_key_id
        if self.secret_access_key:
            kwargs["aws_secret_access_key"] = self.secret_access_key
        if self.session_token:
            kwargs["aws_session_token"] = self.session_token
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        for key in CLIENT_PASSTHROUGH_KEYS:
            if key in self.extra:
                kwargs[key] = self.extra[key]
        return kwargs


class SendResult(BaseModel):
    """Outcome of an accepted raw message; message_id is None when SES returned no id."""

    message_id: Optional[str] = Field(None, alias="messageId")

    class Config:
        populate_by_name = True
        frozen = True
