"""User use cases."""

from .list_followings import ListFollowingsRequest, ListFollowingsUseCase

__all__ = ["ListFollowingsUseCase", "ListFollowingsRequest"]
