from pydantic import BaseModel, ConfigDict
from typing import Optional

# --- Auth Schemas ---
class LoginRequest(BaseModel):
    ethAddress: str
    password: str

class RefreshRequest(BaseModel):
    accessToken: str
    refreshToken: str

class JwtTokens(BaseModel):
    access: str
    refresh: str

class TokenResponse(BaseModel):
    jwtTokens: JwtTokens

    model_config = ConfigDict(extra="allow")

# --- Analysis Schemas ---
class SubmissionResponse(BaseModel):
    uuid: str
    status: str
    apiVersion: Optional[str] = None
    submittedAt: Optional[str] = None

    model_config = ConfigDict(extra="allow")

class StatusRecord(BaseModel):
    uuid: Optional[str] = None
    status: str
    error: Optional[str] = None

    model_config = ConfigDict(extra="allow")
