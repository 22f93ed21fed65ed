from portal.domains.identity.schemas import UserCreate, UserLogin, Token, SessionResponse
from portal.domains.identity.services import IdentityService

__all__ = ["UserCreate", "UserLogin", "Token", "SessionResponse", "IdentityService"]
