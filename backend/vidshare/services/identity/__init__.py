from .dto import ChannelProfileOut, UserPublicOut, UserRegisterIn, UserUpdateIn
from .service import IdentityService, to_public

__all__ = [
    "ChannelProfileOut",
    "IdentityService",
    "UserPublicOut",
    "UserRegisterIn",
    "UserUpdateIn",
    "to_public",
]
