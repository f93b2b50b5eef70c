"""Unit tests for ExternalLoginUseCase."""

from unittest.mock import AsyncMock, patch

from dishka import AsyncContainer
import pytest
from sqlalchemy.exc import IntegrityError

from rally.adapter.error import IdTokenVerificationError
from rally.adapter.oidc import MockIdentityProviderClient
from rally.application.usecase.auth import (
    ExternalLoginRequest,
    ExternalLoginUseCase,
    LinkState,
)
from rally.domain.error import IdentityLinkFailed, IdentityLinkRejected
from rally.domain.model import Authentication
from rally.domain.model.user import DEFAULT_AVATAR
from rally.domain.service import AuthService, IdentityProviderClient, JWTService
from rally.domain.value import (
    AuthProvider,
    EmailVerificationStatus,
    IdentityClaims,
    UserId,
)
from rally.persistence.repository.inmemory import InMemoryDatabase
from tests.factories import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

STATE = "csrf-state"
VERIFIER = "pkce-verifier"
NONCE = "nonce-value"


def _request(provider: AuthProvider = AuthProvider.GOOGLE, **overrides) -> ExternalLoginRequest:
    fields = dict(
        provider=provider,
        code="auth-code",
        state=STATE,
        stored_state=STATE,
        stored_verifier=VERIFIER,
        stored_nonce=NONCE,
    )
    fields.update(overrides)
    return ExternalLoginRequest(**fields)


async def _client(
    env: AsyncContainer, provider: AuthProvider = AuthProvider.GOOGLE
) -> MockIdentityProviderClient:
    clients = await env.get(dict[AuthProvider, IdentityProviderClient])
    return clients[provider]


class TestCallbackRejection:
    """Client problems stop the attempt before anything is written."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides, reason",
        [
            ({"state": "forged-state"}, "state_mismatch"),
            ({"state": None}, "state_mismatch"),
            ({"stored_state": None}, "state_mismatch"),
            ({"stored_state": ""}, "state_mismatch"),
            ({"code": None}, "missing_code"),
            ({"stored_verifier": None}, "missing_verifier"),
            ({"stored_nonce": None}, "missing_nonce"),
        ],
    )
    async def test_rejected_without_side_effects(self, unit_env, overrides, reason):
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)
        client = await _client(unit_env)

        # Act
        with pytest.raises(IdentityLinkRejected) as exc_info:
            await use_case.execute(_request(**overrides))

        # Assert
        assert exc_info.value.reason == reason
        assert exc_info.value.state == LinkState.CALLBACK_RECEIVED.value
        assert client.exchanges == []
        assert database.transactions.begun == 0
        assert database.users.snapshot()[0] == {}
        assert database.authentications.snapshot() == []


class TestProviderFailure:
    """Provider problems are server-class failures."""

    @pytest.mark.asyncio
    async def test_token_exchange_error(self, unit_env):
        use_case = await unit_env.get(ExternalLoginUseCase)

        with pytest.raises(IdentityLinkFailed) as exc_info:
            await use_case.execute(_request(code="invalid"))

        assert exc_info.value.reason == "token_exchange_failed"
        assert exc_info.value.state == LinkState.STATE_VERIFIED.value

    @pytest.mark.asyncio
    async def test_missing_id_token(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        client = await _client(unit_env)
        client.id_token = None

        # Act
        with pytest.raises(IdentityLinkFailed) as exc_info:
            await use_case.execute(_request())

        # Assert
        assert exc_info.value.reason == "missing_id_token"
        assert client.verified_nonces == []

    @pytest.mark.asyncio
    async def test_invalid_id_token(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)
        client = await _client(unit_env)
        client.verify_id_token = AsyncMock(
            side_effect=IdTokenVerificationError("ID token nonce does not match")
        )

        # Act
        with pytest.raises(IdentityLinkFailed) as exc_info:
            await use_case.execute(_request())

        # Assert
        assert exc_info.value.reason == "id_token_invalid"
        assert exc_info.value.state == LinkState.TOKEN_EXCHANGED.value
        assert database.transactions.begun == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "claims, reason",
        [
            (IdentityClaims(sub="s-1", name=None, email="a@example.com"), "missing_name"),
            (IdentityClaims(sub="s-1", name="Aki", email=None), "missing_email"),
        ],
    )
    async def test_missing_mandatory_claim(self, unit_env, claims, reason):
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        client = await _client(unit_env)
        client.claims = claims

        # Act
        with pytest.raises(IdentityLinkFailed) as exc_info:
            await use_case.execute(_request())

        # Assert
        assert exc_info.value.reason == reason
        assert exc_info.value.state == LinkState.TOKEN_EXCHANGED.value

    @pytest.mark.asyncio
    async def test_unconfigured_provider(self, unit_env):
        # Arrange
        database = await unit_env.get(InMemoryDatabase)
        use_case = ExternalLoginUseCase(
            auth_service=AuthService(identity_providers={}),
            jwt_service=await unit_env.get(JWTService),
            user_repository=database.users,
            authentication_repository=database.authentications,
            transaction_manager=database.transactions,
        )

        # Act
        with pytest.raises(IdentityLinkFailed) as exc_info:
            await use_case.execute(_request())

        # Assert
        assert exc_info.value.reason == "provider_unavailable"


class TestProvisioning:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider", list(AuthProvider))
    async def test_first_login_creates_user_and_link(self, unit_env, provider):
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)
        jwt_service = await unit_env.get(JWTService)
        client = await _client(unit_env, provider)

        # Act
        response = await use_case.execute(_request(provider))

        # Assert
        assert response.provisioned is True
        assert client.exchanges == [("auth-code", VERIFIER)]
        assert client.verified_nonces == [NONCE]

        user = await database.users.find_by_id(response.user_id)
        assert user is not None
        assert user.name == "Mock User"
        assert user.email == f"mock@{provider.value}.example"
        assert user.avatar == DEFAULT_AVATAR
        assert user.email_verification_status == EmailVerificationStatus.VERIFIED
        assert user.has_usable_password is False

        link = await database.authentications.find_by_provider(
            provider, f"mock-{provider.value}-subject"
        )
        assert link is not None
        assert link.user_id == response.user_id

        assert jwt_service.verify_token(response.token).sub == str(response.user_id)
        assert database.transactions.committed == 1

    @pytest.mark.asyncio
    async def test_picture_becomes_avatar_and_long_name_is_cut(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)
        client = await _client(unit_env)
        client.claims = IdentityClaims(
            sub="long-name",
            name="x" * 300,
            email="long@example.com",
            picture="https://example.com/me.png",
        )

        # Act
        response = await use_case.execute(_request())

        # Assert
        user = await database.users.find_by_id(response.user_id)
        assert user.avatar == "https://example.com/me.png"
        assert len(user.name) == 255

    @pytest.mark.asyncio
    async def test_second_login_reuses_link(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)
        first = await use_case.execute(_request())

        # Act
        second = await use_case.execute(_request())

        # Assert
        assert second.provisioned is False
        assert second.user_id == first.user_id
        assert database.transactions.begun == 1
        assert len(database.users.snapshot()[0]) == 1

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected_before_transaction(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)
        existing = make_user(1).model_copy(update={"email": "mock@google.example"})
        await database.users.add(existing)

        # Act
        with pytest.raises(IdentityLinkRejected) as exc_info:
            await use_case.execute(_request())

        # Assert
        assert exc_info.value.reason == "duplicate_email"
        assert exc_info.value.state == LinkState.CLAIMS_VERIFIED.value
        assert database.transactions.begun == 0
        assert database.authentications.snapshot() == []

    @pytest.mark.asyncio
    async def test_failed_link_insert_rolls_back_user(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)
        violation = IntegrityError(
            "INSERT INTO authentications", None, Exception("unique violation")
        )

        # Act
        with patch.object(
            database.authentications, "add", AsyncMock(side_effect=violation)
        ):
            with pytest.raises(IdentityLinkFailed) as exc_info:
                await use_case.execute(_request())

        # Assert
        assert exc_info.value.reason == "store_error"
        assert exc_info.value.__cause__ is violation
        assert database.transactions.rolled_back == 1
        assert database.transactions.committed == 0
        assert await database.users.find_by_email("mock@google.example") is None
        assert database.users.snapshot()[0] == {}

    @pytest.mark.asyncio
    async def test_failed_user_insert_is_a_failure(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)
        violation = IntegrityError("INSERT INTO users", None, Exception("boom"))

        # Act
        with patch.object(database.users, "add", AsyncMock(side_effect=violation)):
            with pytest.raises(IdentityLinkFailed) as exc_info:
                await use_case.execute(_request())

        # Assert
        assert exc_info.value.reason == "store_error"
        assert database.transactions.rolled_back == 1
        assert database.authentications.snapshot() == []

    @pytest.mark.asyncio
    async def test_link_created_concurrently_is_reused(self, unit_env):
        """A link that appears between the read and the transaction wins."""
        # Arrange
        use_case = await unit_env.get(ExternalLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)
        winner = make_user(42)
        await database.users.add(winner)

        calls = 0

        async def find_late(provider, uid):
            nonlocal calls
            calls += 1
            if calls == 1:
                return None
            return Authentication(provider=provider, uid=uid, user_id=UserId(42))

        # Act
        with patch.object(database.authentications, "find_by_provider", find_late):
            response = await use_case.execute(_request())

        # Assert
        assert response.user_id == 42
        assert response.provisioned is False
        assert database.transactions.committed == 1
        assert len(database.users.snapshot()[0]) == 1
