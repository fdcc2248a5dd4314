from .authenticator import RequestAuthenticator
from .dto import ChangePasswordIn, LoginIn, RefreshIn, SessionOut, TokenPairOut
from .service import SessionService

__all__ = [
    "ChangePasswordIn",
    "LoginIn",
    "RefreshIn",
    "RequestAuthenticator",
    "SessionOut",
    "SessionService",
    "TokenPairOut",
]
