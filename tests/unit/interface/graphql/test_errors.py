"""Unit tests for GraphQL error masking."""

from graphql import GraphQLError
import pytest

from rally.application.loader import LoadError
from rally.domain.error import BadCursorError, IdKindMismatchError
from rally.interface.error import AuthenticationRequiredError
from rally.interface.graphql.errors import is_client_error, should_mask_error


def _error(original: Exception | None) -> GraphQLError:
    return GraphQLError(str(original), path=["recruitments"], original_error=original)


class TestShouldMaskError:
    @pytest.mark.parametrize(
        "original",
        [
            BadCursorError("bogus"),
            IdKindMismatchError("User", "Recruitment"),
            AuthenticationRequiredError(),
            None,
        ],
    )
    def test_client_errors_are_shown(self, original):
        error = _error(original)

        assert is_client_error(error) is True
        assert should_mask_error(error) is False

    @pytest.mark.parametrize(
        "original",
        [
            RuntimeError("relation \"sports\" does not exist"),
            LoadError("SportLoader", [1], RuntimeError("connection refused")),
        ],
    )
    def test_internal_errors_are_masked(self, original):
        error = _error(original)

        assert is_client_error(error) is False
        assert should_mask_error(error) is True
