"""Strongly typed identifiers for Rally domain entities.

All entities use monotonically increasing integer surrogate keys; the
ordering of those keys is what cursor pagination walks over.
"""

from typing import NewType

UserId = NewType("UserId", int)
AuthenticationId = NewType("AuthenticationId", int)
RecruitmentId = NewType("RecruitmentId", int)
TagId = NewType("TagId", int)
SportId = NewType("SportId", int)
PrefectureId = NewType("PrefectureId", int)
StockId = NewType("StockId", int)
RelationshipId = NewType("RelationshipId", int)
