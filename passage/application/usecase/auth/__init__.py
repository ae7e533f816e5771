"""Authentication use cases."""

from .get_current_user import GetCurrentUserUseCase
from .oauth_callback import OAuthCallbackUseCase
from .signin import SigninUseCase
from .signup import SignupUseCase

__all__ = [
    "GetCurrentUserUseCase",
    "OAuthCallbackUseCase",
    "SigninUseCase",
    "SignupUseCase",
]
