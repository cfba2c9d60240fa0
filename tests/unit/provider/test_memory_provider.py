"""
Tests unitaires pour InMemoryIdentityProvider.
"""

import pytest

from authsession.provider import IdentityProviderError, IIdentityProvider, InMemoryIdentityProvider
from authsession.session import Session


KNOWN_EMAIL = "a@x.com"
KNOWN_PASSWORD = "pw-123456"


class TestInterface:

    def test_implements_interface(self, provider) -> None:
        assert isinstance(provider, IIdentityProvider)


class TestEmailPassword:

    @pytest.mark.asyncio
    async def test_sign_in_known_account(self, provider) -> None:
        session = await provider.sign_in_with_email_and_password(KNOWN_EMAIL, KNOWN_PASSWORD)

        assert session.email == KNOWN_EMAIL
        assert session.display_name == "Ada"
        assert provider.current_user == session
        claims = provider.codec.decode(session.metadata["id_token"])
        assert claims["sub"] == session.uid

    @pytest.mark.asyncio
    async def test_sign_in_is_case_insensitive_on_email(self, provider) -> None:
        session = await provider.sign_in_with_email_and_password("  A@X.COM ", KNOWN_PASSWORD)
        assert session.email == KNOWN_EMAIL

    @pytest.mark.asyncio
    async def test_wrong_password(self, provider) -> None:
        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.sign_in_with_email_and_password(KNOWN_EMAIL, "nope-nope")

        assert exc_info.value.code == "auth/wrong-password"
        assert provider.current_user is None

    @pytest.mark.asyncio
    async def test_unknown_user(self, provider) -> None:
        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.sign_in_with_email_and_password("ghost@x.com", KNOWN_PASSWORD)

        assert exc_info.value.code == "auth/user-not-found"

    @pytest.mark.asyncio
    async def test_create_user_signs_in(self, provider) -> None:
        session = await provider.create_user_with_email_and_password("b@x.com", "pw-654321")

        assert session.email == "b@x.com"
        assert session.display_name is None
        assert provider.current_user == session

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password,code",
        [
            ("a@x.com", "pw-123456", "auth/email-already-in-use"),
            ("no-at-sign", "pw-123456", "auth/invalid-email"),
            ("c@x.com", "123", "auth/weak-password"),
        ],
    )
    async def test_create_user_rejections(self, provider, email, password, code) -> None:
        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.create_user_with_email_and_password(email, password)

        assert exc_info.value.code == code

    @pytest.mark.asyncio
    async def test_update_profile_returns_new_session(self, provider) -> None:
        created = await provider.create_user_with_email_and_password("b@x.com", "pw-654321")

        updated = await provider.update_profile(created, "Bea")

        assert updated.display_name == "Bea"
        assert updated.uid == created.uid
        assert created.display_name is None
        assert provider.current_user.display_name == "Bea"

    @pytest.mark.asyncio
    async def test_update_profile_unknown_uid(self, provider) -> None:
        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.update_profile(Session(uid="ghost"), "Ghost")

        assert exc_info.value.code == "auth/user-not-found"


class TestFederated:

    @pytest.mark.asyncio
    async def test_federated_sign_in(self, provider) -> None:
        session = await provider.sign_in_with_federated_provider("google.com")

        assert session.uid == "google-uid-1"
        assert session.email == "ada@gmail.com"
        assert session.metadata["sign_in_provider"] == "google.com"

    @pytest.mark.asyncio
    async def test_unregistered_federated_provider(self, provider) -> None:
        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.sign_in_with_federated_provider("github.com")

        assert exc_info.value.code == "auth/popup-closed-by-user"


class TestPasswordReset:

    @pytest.mark.asyncio
    async def test_reset_email_recorded(self, provider) -> None:
        await provider.send_password_reset_email("A@x.com")
        assert provider.sent_reset_emails == [KNOWN_EMAIL]

    @pytest.mark.asyncio
    async def test_reset_unknown_email(self, provider) -> None:
        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.send_password_reset_email("ghost@x.com")

        assert exc_info.value.code == "auth/user-not-found"
        assert provider.sent_reset_emails == []


class TestAuthStateStream:

    @pytest.mark.asyncio
    async def test_first_notification_delivered_asynchronously(self, provider, drain) -> None:
        received = []

        provider.on_auth_state_changed(received.append)
        assert received == []

        await drain()
        assert received == [None]

    @pytest.mark.asyncio
    async def test_sign_in_and_sign_out_notified(self, provider, drain) -> None:
        received = []
        provider.on_auth_state_changed(received.append)
        await drain()

        session = await provider.sign_in_with_email_and_password(KNOWN_EMAIL, KNOWN_PASSWORD)
        await drain()
        await provider.sign_out()
        await drain()

        assert received == [None, session, None]

    @pytest.mark.asyncio
    async def test_unsubscribe_stops_delivery(self, provider, drain) -> None:
        received = []
        unsubscribe = provider.on_auth_state_changed(received.append)

        unsubscribe()
        unsubscribe()
        await drain()

        assert received == []

    @pytest.mark.asyncio
    async def test_push_state(self, provider, drain) -> None:
        received = []
        provider.on_auth_state_changed(received.append)
        other = Session(uid="elsewhere")

        provider.push_state(other)
        await drain()

        assert received[-1] == other
        assert provider.current_user == other


class TestFailureInjection:

    @pytest.mark.asyncio
    async def test_fail_next_default_error(self, provider) -> None:
        provider.fail_next("sign_out")

        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.sign_out()
        assert exc_info.value.code == "auth/network-request-failed"

        # Une seule fois
        await provider.sign_out()

    @pytest.mark.asyncio
    async def test_fail_next_custom_error(self, provider) -> None:
        provider.fail_next("send_password_reset_email", ConnectionError("offline"))

        with pytest.raises(ConnectionError):
            await provider.send_password_reset_email(KNOWN_EMAIL)

    def test_fail_next_unknown_operation(self, provider) -> None:
        with pytest.raises(ValueError):
            provider.fail_next("delete_everything")
