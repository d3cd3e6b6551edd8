"""
Noteful API — Registration Tests
================================

What:  Validation order and messages of validate_registration, and the
       uniqueness check in UserService.register.
How:   Pure function tests plus a mocked session; bcrypt is patched out.
"""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from noteful.exceptions import RegistrationError
from noteful.services.user_service import UserService, validate_registration


def expect_rejection(payload, message, location):
    with pytest.raises(RegistrationError) as exc_info:
        validate_registration(payload)
    assert exc_info.value.message == message
    assert exc_info.value.location == location


class TestValidateRegistration:
    def test_valid_payload(self):
        registration = validate_registration(
            {"username": "bobuser", "password": "baseball1", "fullname": "  Bob User "}
        )
        assert registration.username == "bobuser"
        assert registration.password == "baseball1"
        assert registration.fullname == "Bob User"

    def test_fullname_optional(self):
        registration = validate_registration({"username": "bob", "password": "baseball1"})
        assert registration.fullname is None

    def test_blank_fullname_becomes_none(self):
        registration = validate_registration(
            {"username": "bob", "password": "baseball1", "fullname": "   "}
        )
        assert registration.fullname is None

    # ── 1. Required fields ────────────────────────────────────────────────

    def test_missing_username(self):
        expect_rejection({"password": "baseball1"}, "Missing 'username' in request body", "username")

    def test_missing_password(self):
        expect_rejection({"username": "bob"}, "Missing 'password' in request body", "password")

    # ── 2. Types ──────────────────────────────────────────────────────────

    def test_non_string_username(self):
        expect_rejection(
            {"username": 1234, "password": "baseball1"},
            "Incorrect field type: username must be string",
            "username",
        )

    def test_non_string_password(self):
        expect_rejection(
            {"username": "bob", "password": ["baseball1"]},
            "Incorrect field type: password must be string",
            "password",
        )

    def test_non_string_fullname(self):
        expect_rejection(
            {"username": "bob", "password": "baseball1", "fullname": 7},
            "Incorrect field type: fullname must be string",
            "fullname",
        )

    def test_missing_checked_before_type(self):
        expect_rejection({"username": 42}, "Missing 'password' in request body", "password")

    # ── 3. Whitespace ─────────────────────────────────────────────────────

    def test_untrimmed_username(self):
        expect_rejection(
            {"username": " bob", "password": "baseball1"},
            "Need to remove whitespace in username",
            "username",
        )

    def test_untrimmed_password(self):
        expect_rejection(
            {"username": "bob", "password": "baseball1 "},
            "Need to remove whitespace in password",
            "password",
        )

    # ── 4. Sizes ──────────────────────────────────────────────────────────

    def test_empty_username(self):
        expect_rejection(
            {"username": "", "password": "baseball1"},
            "Must be at least 1 characters long",
            "username",
        )

    def test_short_password(self):
        expect_rejection(
            {"username": "bob", "password": "short"},
            "Must be at least 8 characters long",
            "password",
        )

    def test_long_password(self):
        expect_rejection(
            {"username": "bob", "password": "x" * 73},
            "Must be at most 72 characters long",
            "password",
        )

    def test_password_boundaries_accepted(self):
        validate_registration({"username": "bob", "password": "x" * 8})
        validate_registration({"username": "bob", "password": "x" * 72})


class TestRegister:
    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self, mock_db_session):
        count_result = MagicMock()
        count_result.scalar_one.return_value = 1
        mock_db_session.execute.return_value = count_result

        with pytest.raises(RegistrationError) as exc_info:
            await self.service.register(
                mock_db_session, {"username": "bob", "password": "baseball1"}
            )

        assert exc_info.value.message == "Username bob already exist, please pick a new one"
        assert exc_info.value.location == "username"
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_stores_digest_not_plaintext(self, mock_db_session):
        count_result = MagicMock()
        count_result.scalar_one.return_value = 0
        mock_db_session.execute.return_value = count_result

        async def assign_id():
            mock_db_session.add.call_args.args[0].id = uuid4()

        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        with patch(
            "noteful.services.user_service.hash_password",
            AsyncMock(return_value="$2b$12$digest"),
        ) as mock_hash:
            result = await self.service.register(
                mock_db_session,
                {"username": "bob", "password": "baseball1", "fullname": "Bob"},
            )

        mock_hash.assert_awaited_once_with("baseball1")
        stored = mock_db_session.add.call_args.args[0]
        assert stored.password == "$2b$12$digest"
        assert result.username == "bob"
        assert result.fullname == "Bob"
        assert "password" not in result.model_dump()

    @pytest.mark.asyncio
    async def test_invalid_payload_never_queries(self, mock_db_session):
        with pytest.raises(RegistrationError):
            await self.service.register(mock_db_session, {"username": "bob"})
        mock_db_session.execute.assert_not_awaited()
