"""API Gateway HTTP API (payload v2) event and result models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class HttpEvent:
    method: str
    raw_path: str
    raw_query_string: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    cookies: list[str] | None = None  # API Gateway strips Cookie into this list
    body: str | None = None
    is_base64_encoded: bool = False
    raw: dict[str, Any] = field(default_factory=dict, repr=False)  # untouched event

    @classmethod
    def from_dict(cls, event: Mapping[str, Any]) -> "HttpEvent":
        """Parse the mapping handed to the Lambda entry point."""
        http = (event.get("requestContext") or {}).get("http") or {}
        return cls(
            method=str(http.get("method", "")).upper(),
            raw_path=event.get("rawPath") or "/",
            raw_query_string=event.get("rawQueryString") or "",
            headers=dict(event.get("headers") or {}),
            cookies=event.get("cookies"),
            body=event.get("body"),
            is_base64_encoded=bool(event.get("isBase64Encoded", False)),
            raw=dict(event),
        )

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == name:
                return value
        return None


@dataclass
class ProxyResult:
    status_code: int
    headers: dict[str, str] | None = None
    cookies: list[str] | None = None
    body: str | None = None
    is_base64_encoded: bool | None = None

    @classmethod
    def from_value(cls, value: "ProxyResult | Mapping[str, Any]") -> "ProxyResult":
        """Accept a ProxyResult or a mapping in the Lambda result shape."""
        if isinstance(value, ProxyResult):
            return value
        if isinstance(value, Mapping):
            if "statusCode" not in value:
                raise TypeError("Handler result mapping has no statusCode")
            return cls(
                status_code=int(value["statusCode"]),
                headers=value.get("headers"),
                cookies=value.get("cookies"),
                body=value.get("body"),
                is_base64_encoded=value.get("isBase64Encoded"),
            )
        raise TypeError(f"Handler returned {type(value).__name__}, expected ProxyResult or mapping")

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"statusCode": self.status_code}
        if self.headers is not None:
            result["headers"] = self.headers
        if self.cookies is not None:
            result["cookies"] = self.cookies
        if self.body is not None:
            result["body"] = self.body
        if self.is_base64_encoded is not None:
            result["isBase64Encoded"] = self.is_base64_encoded
        return result


def not_found() -> ProxyResult:
    return ProxyResult(status_code=404, body="Not Found")
