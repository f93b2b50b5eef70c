"""Recruitment use cases."""

from .list_recruitments import ListRecruitmentsRequest, ListRecruitmentsUseCase

__all__ = ["ListRecruitmentsUseCase", "ListRecruitmentsRequest"]
