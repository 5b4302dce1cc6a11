from dataclasses import dataclass

from app.dto.user import UserProfileDto


@dataclass
class AuthTokenDto:
    access_token: str
    refresh_token: str


@dataclass
class AuthResultDto:
    user: UserProfileDto
    access_token: str
    refresh_token: str
