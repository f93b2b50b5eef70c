"""User aggregate root.

Users register with a password or through an external identity provider
(Google, LINE). Provider-registered users have an unusable password digest.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from rally.domain.model.common import DomainModel
from rally.domain.value import EmailVerificationStatus, UserId, UserRole

# Prefix marking a password digest that can never match a password
UNUSABLE_PASSWORD_PREFIX = "!"

DEFAULT_AVATAR = "https://rally.example/static/default-avatar.png"


class User(DomainModel):
    """User aggregate root.

    `id` is None until the user has been inserted.
    """

    id: Optional[UserId] = None
    name: str = Field(min_length=1, max_length=255)
    email: str
    unverified_email: Optional[str] = None
    avatar: str = DEFAULT_AVATAR
    role: UserRole = UserRole.GENERAL
    introduction: Optional[str] = None
    email_verification_status: EmailVerificationStatus = (
        EmailVerificationStatus.UNVERIFIED
    )
    password_digest: str
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def has_usable_password(self) -> bool:
        return not self.password_digest.startswith(UNUSABLE_PASSWORD_PREFIX)
