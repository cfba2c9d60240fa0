"""
Tests unitaires pour SensitiveMasker.
"""

import pytest

from authsession.logging import ISensitiveMasker, SensitiveMasker


@pytest.fixture
def masker() -> SensitiveMasker:
    return SensitiveMasker()


class TestSensitiveMasker:

    def test_implements_interface(self, masker) -> None:
        assert isinstance(masker, ISensitiveMasker)

    @pytest.mark.parametrize("key", ["password", "PASSWORD", "id_token", "refresh_token", "client_secret"])
    def test_sensitive_keys_masked(self, masker, key) -> None:
        assert masker.mask({key: "value"})[key] == SensitiveMasker.MASK_VALUE

    def test_non_sensitive_keys_kept(self, masker) -> None:
        data = {"uid": "u-1", "display_name": "Bea", "action": "sign_in"}
        assert masker.mask(data) == data

    def test_nested_metadata_masked(self, masker) -> None:
        data = {"session": {"uid": "u-1", "metadata": {"id_token": "eyJ..."}}}

        masked = masker.mask(data)

        assert masked["session"]["metadata"]["id_token"] == SensitiveMasker.MASK_VALUE
        assert masked["session"]["uid"] == "u-1"

    def test_list_of_dicts_masked(self, masker) -> None:
        masked = masker.mask({"accounts": [{"password": "x"}, {"uid": "u"}]})
        assert masked["accounts"][0]["password"] == SensitiveMasker.MASK_VALUE
        assert masked["accounts"][1]["uid"] == "u"

    def test_original_not_modified(self, masker) -> None:
        data = {"password": "secret"}
        masker.mask(data)
        assert data["password"] == "secret"

    def test_mask_email(self, masker) -> None:
        assert masker.mask_email("bea@x.com") == "b***@x.com"
        assert masker.mask_email("not-an-address") == SensitiveMasker.MASK_VALUE
        assert masker.mask_email("") == SensitiveMasker.MASK_VALUE

    def test_email_key_with_none_value(self, masker) -> None:
        assert masker.mask({"email": None}) == {"email": None}

    def test_add_pattern(self, masker) -> None:
        masker.add_pattern("Phone")
        assert masker.is_sensitive_key("phone_number")

    def test_add_empty_pattern_raises(self, masker) -> None:
        with pytest.raises(ValueError):
            masker.add_pattern("  ")

    def test_additional_patterns_at_init(self) -> None:
        masker = SensitiveMasker(additional_patterns=["otp"])
        assert masker.is_sensitive_key("otp_code")
        assert "otp" in masker.patterns
