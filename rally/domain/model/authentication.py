"""Authentication record.

Links an external provider subject to a local user account.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from rally.domain.model.common import DomainModel
from rally.domain.value import AuthenticationId, AuthProvider, UserId


class Authentication(DomainModel):
    """External identity linked to a local user.

    `(provider, uid)` is unique; a user may have one record per provider.
    """

    id: Optional[AuthenticationId] = None
    provider: AuthProvider
    uid: str  # `sub` claim from the provider
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
