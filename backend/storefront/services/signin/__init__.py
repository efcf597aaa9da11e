from .dto import InvalidCredentials, SignedIn, SignInOutcome, SignInRequest
from .service import SignInService

__all__ = ["InvalidCredentials", "SignInOutcome", "SignInRequest", "SignInService", "SignedIn"]
