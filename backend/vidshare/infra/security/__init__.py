from .werkzeug_password_verifier import WerkzeugPasswordVerifier

__all__ = ["WerkzeugPasswordVerifier"]
