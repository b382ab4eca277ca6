from pydantic import BaseModel


class LoginRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {"username": "city-motors", "password": "Pass1234!"},
        }
    }

    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
    showroom_id: str | None = None
    trace_id: str


class UserResponse(BaseModel):
    id: str
    username: str
    role: str
    showroom_id: str | None = None
    showroom_name: str | None = None


class OAuth2TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
