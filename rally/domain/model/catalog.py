"""Reference entities attached to recruitments."""

from rally.domain.model.common import DomainModel
from rally.domain.value import PrefectureId, SportId, TagId


class Tag(DomainModel):
    id: TagId
    name: str


class Sport(DomainModel):
    id: SportId
    name: str


class Prefecture(DomainModel):
    id: PrefectureId
    name: str
