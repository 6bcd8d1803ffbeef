"""Unit tests for IdentityService."""

import pytest

from cleartrack.domain.error import (
    AlreadyExistsError,
    UnauthenticatedError,
    ValidationError,
)
from cleartrack.domain.repository import CredentialRepository
from cleartrack.domain.service import IdentityService
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateAccount:
    @pytest.mark.asyncio
    async def test_password_is_stored_hashed(self, unit_env):
        # Arrange
        service = await unit_env.get(IdentityService)
        credentials = await unit_env.get(CredentialRepository)

        # Act
        user_id = await service.create_account(" Sam@Example.com", "s3cret!")

        # Assert
        credential = await credentials.find_by_email("sam@example.com")
        assert credential is not None
        assert credential.user_id == user_id
        assert credential.password_hash != "s3cret!"
        assert await service.exists("SAM@example.com")

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, unit_env):
        service = await unit_env.get(IdentityService)
        await service.create_account("sam@example.com", "s3cret!")

        with pytest.raises(AlreadyExistsError):
            await service.create_account("Sam@example.com", "other-pass")

    @pytest.mark.asyncio
    async def test_malformed_email_rejected(self, unit_env):
        service = await unit_env.get(IdentityService)

        with pytest.raises(ValidationError, match="Invalid email address"):
            await service.create_account("sam-at-example", "s3cret!")


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_correct_password(self, unit_env):
        service = await unit_env.get(IdentityService)
        user_id = await service.create_account("sam@example.com", "s3cret!")

        assert await service.authenticate("Sam@Example.com", "s3cret!") == user_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email, password",
        [("sam@example.com", "wrong"), ("nobody@example.com", "s3cret!")],
    )
    async def test_bad_credentials(self, unit_env, email, password):
        service = await unit_env.get(IdentityService)
        await service.create_account("sam@example.com", "s3cret!")

        with pytest.raises(UnauthenticatedError, match="Invalid email or password"):
            await service.authenticate(email, password)
