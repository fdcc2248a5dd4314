"""Per-request authentication from an access credential."""

from __future__ import annotations

from vidshare.services._shared.base import BaseService
from vidshare.services._shared.errors import InvalidCredentialError, UnauthenticatedError
from vidshare.services._shared.ports import CredentialCodec, TokenKind
from vidshare.services.identity.dto import UserPublicOut
from vidshare.services.identity.service import to_public


class RequestAuthenticator(BaseService):
    """
    Resolve an access credential to the current user.

    Access credentials are stateless: the session store is never consulted,
    so they remain valid until expiry even after logout.
    """

    def __init__(self, *, codec: CredentialCodec) -> None:
        self.codec = codec

    def authenticate(self, access_token: str | None) -> UserPublicOut:
        """
        :raises UnauthenticatedError: Missing, invalid, expired or wrong-kind
            credential, or the subject no longer exists.
        """
        if not access_token:
            raise UnauthenticatedError(reason="missing access credential")
        try:
            subject_id = self.codec.verify(access_token, TokenKind.ACCESS)
        except InvalidCredentialError as exc:
            raise UnauthenticatedError(reason=exc.reason) from exc

        with self.ro_uow() as uow:
            user = uow.users.get(subject_id)
            if user is None:
                raise UnauthenticatedError(reason="subject deleted")
            return to_public(user)
