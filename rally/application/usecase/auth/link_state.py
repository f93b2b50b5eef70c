"""States of one external login attempt."""

from enum import Enum


class LinkState(str, Enum):
    """Login attempt progress.

    Initiated -> RedirectIssued -> CallbackReceived -> StateVerified ->
    TokenExchanged -> ClaimsVerified -> (Linked | Provisioned) -> SessionIssued.
    An attempt that stops early records the state it stopped in.
    """

    INITIATED = "initiated"
    REDIRECT_ISSUED = "redirect_issued"
    CALLBACK_RECEIVED = "callback_received"
    STATE_VERIFIED = "state_verified"
    TOKEN_EXCHANGED = "token_exchanged"
    CLAIMS_VERIFIED = "claims_verified"
    LINKED = "linked"
    PROVISIONED = "provisioned"
    SESSION_ISSUED = "session_issued"
