"""Authentication use cases."""

from .external_login import (
    ExternalLoginRequest,
    ExternalLoginResponse,
    ExternalLoginUseCase,
)
from .get_viewer import GetViewerRequest, GetViewerResponse, GetViewerUseCase
from .initiate_login import InitiateLoginRequest, InitiateLoginUseCase, LoginChallenge
from .link_state import LinkState

__all__ = [
    "InitiateLoginUseCase",
    "InitiateLoginRequest",
    "LoginChallenge",
    "ExternalLoginUseCase",
    "ExternalLoginRequest",
    "ExternalLoginResponse",
    "GetViewerUseCase",
    "GetViewerRequest",
    "GetViewerResponse",
    "LinkState",
]
