"""Cliente Python para la API REST y el flujo OAuth2 de ThriveCart."""

from thrivecart.adapters.http_client import HttpxTransport, build_client
from thrivecart.adapters.oauth import ThriveCartOAuth
from thrivecart.core.config import API_VERSION, SDK_VERSION, AppSettings
from thrivecart.core.domain.models import Mode, RawResponse, RequestSpec, ResourceOwnerProfile, map_resource_owner
from thrivecart.core.errors import (
    ErrorKind,
    RemoteError,
    ThriveCartError,
    TransportError,
    ValidationError,
    classify_failure,
)
from thrivecart.core.interfaces.transport import HttpTransport
from thrivecart.core.request_builder import RequestBuilder, RequestContext
from thrivecart.core.services.api_client import ThriveCartClient

__version__ = SDK_VERSION

__all__ = [
    "API_VERSION",
    "SDK_VERSION",
    "AppSettings",
    "ErrorKind",
    "HttpTransport",
    "HttpxTransport",
    "Mode",
    "RawResponse",
    "RemoteError",
    "RequestBuilder",
    "RequestContext",
    "RequestSpec",
    "ResourceOwnerProfile",
    "ThriveCartClient",
    "ThriveCartError",
    "ThriveCartOAuth",
    "TransportError",
    "ValidationError",
    "build_client",
    "classify_failure",
    "map_resource_owner",
]
