"""
HTTP Transaction Schema
=======================

Bounded Context: HTTP Handler Records

Request and response payloads written under ``data.http_request`` and
``data.http_response`` by ``SukiLogger.request_http``.

Design:
- Header, param and query maps are always dicts, never None
- The response error defaults to an empty ErrorInfo

Record Flow:
    Handler → with_http_request/with_http_response → request_http → sink
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .common import ErrorInfo, first_error, string_map


@dataclass(frozen=True)
class HTTPRequestInfo:
    """
    Inbound HTTP request as seen by a handler.

    Attributes:
        method: HTTP method (e.g., "POST")
        path: Request path
        remote_ip: Client address
        headers: Request headers
        params: Path parameters
        query: Query string parameters
        body: Request body text

    Example:
        >>> req = with_http_request("GET", "/orders/1", "10.0.0.1",
        ...                         None, {"id": "1"}, None, "")
        >>> req.headers
        {}
    """
    method: str
    path: str
    remote_ip: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'method': self.method,
            'path': self.path,
            'remote_ip': self.remote_ip,
            'headers': dict(self.headers),
            'params': dict(self.params),
            'query': dict(self.query),
            'body': self.body,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HTTPRequestInfo':
        """Deserialize from dict.

        Raises:
            ValueError: If method or path is missing
        """
        try:
            return cls(
                method=str(data['method']),
                path=str(data['path']),
                remote_ip=str(data.get('remote_ip', '')),
                headers=string_map(data.get('headers')),
                params=string_map(data.get('params')),
                query=string_map(data.get('query')),
                body=str(data.get('body', '')),
            )
        except KeyError as e:
            raise ValueError(f"Missing required HTTPRequestInfo field: {e}")


@dataclass(frozen=True)
class HTTPResponseInfo:
    """
    Outcome of an HTTP request.

    Attributes:
        status: HTTP status code
        duration: Handling time (caller's unit, usually milliseconds)
        body: Response body text
        error: Error details, empty when the request succeeded
    """
    status: int
    duration: float = 0.0
    body: str = ""
    error: ErrorInfo = field(default_factory=ErrorInfo)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'status': self.status,
            'duration': self.duration,
            'body': self.body,
            'error': self.error.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HTTPResponseInfo':
        """Deserialize from dict.

        Raises:
            ValueError: If status is missing or invalid
        """
        try:
            return cls(
                status=int(data['status']),
                duration=float(data.get('duration', 0.0)),
                body=str(data.get('body', '')),
                error=ErrorInfo.from_dict(data.get('error')),
            )
        except KeyError as e:
            raise ValueError(f"Missing required HTTPResponseInfo field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid HTTPResponseInfo data: {e}")

    @property
    def failed(self) -> bool:
        """True when an error was attached."""
        return bool(self.error.name or self.error.stack_trace)


def with_http_request(
    method: str,
    path: str,
    remote_ip: str,
    headers: Optional[Dict[str, str]],
    params: Optional[Dict[str, str]],
    query: Optional[Dict[str, str]],
    body: str,
) -> HTTPRequestInfo:
    return HTTPRequestInfo(
        method=method,
        path=path,
        remote_ip=remote_ip,
        headers=string_map(headers),
        params=string_map(params),
        query=string_map(query),
        body=body,
    )


def with_http_response(
    status: int,
    duration: float,
    body: str,
    *error: ErrorInfo,
) -> HTTPResponseInfo:
    """Build a response payload; only the first error argument is used."""
    return HTTPResponseInfo(
        status=status,
        duration=duration,
        body=body,
        error=first_error(error),
    )
