"""Which GraphQL errors reach clients unchanged.

Validation errors (bad ids, bad page arguments) and missing authentication
are reported as raised. Anything else, such as store or loader failures,
is logged and replaced by a generic message.
"""

import logfire
from graphql import GraphQLError
from strawberry.extensions import MaskErrors

from rally.domain.error import ValidationError
from rally.interface.error import AuthenticationRequiredError

MASKED_ERROR_MESSAGE = "Internal server error"

CLIENT_ERRORS = (ValidationError, AuthenticationRequiredError)


def is_client_error(error: GraphQLError) -> bool:
    """Whether the error is safe to show to the client as-is.

    Errors without an original exception come from parsing or validating
    the query document itself.
    """
    original = error.original_error
    return original is None or isinstance(original, CLIENT_ERRORS)


def should_mask_error(error: GraphQLError) -> bool:
    if is_client_error(error):
        return False

    logfire.error(
        "GraphQL resolver failed",
        path=error.path,
        error=str(error.original_error),
        error_type=type(error.original_error).__name__,
    )
    return True


def create_error_masking() -> MaskErrors:
    """Schema extension masking every error that is not a client error."""
    return MaskErrors(
        should_mask_error=should_mask_error, error_message=MASKED_ERROR_MESSAGE
    )
