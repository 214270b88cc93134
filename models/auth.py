from typing import Optional
from pydantic import BaseModel


# -----------------------------------------------------
# LOGIN REQUEST
# Format checks happen in the router so the SPA gets readable messages
# -----------------------------------------------------
class LoginRequest(BaseModel):
    email: str
    password: str


# -----------------------------------------------------
# TOKEN RESPONSE (signed session JWT)
# -----------------------------------------------------
class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int           # Seconds until expiration
    role: str
    region: Optional[str] = None
