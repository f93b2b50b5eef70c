"""Request-scoped batched loaders."""

from .association import FollowingLoader, StockLoader
from .base import BatchLoader, LoadError
from .entity import PrefectureLoader, SportLoader, UserLoader
from .factory import Loaders, create_loaders
from .recruitment import RecruitmentTagsLoader, StockCountLoader

__all__ = [
    "BatchLoader",
    "LoadError",
    "Loaders",
    "create_loaders",
    "UserLoader",
    "SportLoader",
    "PrefectureLoader",
    "RecruitmentTagsLoader",
    "StockCountLoader",
    "StockLoader",
    "FollowingLoader",
]
