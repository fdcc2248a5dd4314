from .jwt_credential_codec import JWTCredentialCodec

__all__ = ["JWTCredentialCodec"]
