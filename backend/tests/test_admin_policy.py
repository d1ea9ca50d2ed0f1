import pytest

from campusconnect.config import Settings
from campusconnect.services.admin_policy import is_admin_email

ALLOW_LIST = {"admin@campusconnect.com", "dean@uni.edu"}


class TestIsAdminEmail:
    @pytest.mark.parametrize("email", [
        "admin@campusconnect.com",
        "ADMIN@CampusConnect.com",
        "  dean@uni.edu ",
    ])
    def test_allow_listed_emails(self, email):
        assert is_admin_email(email, ALLOW_LIST) is True

    @pytest.mark.parametrize("email", [
        None,
        "",
        "   ",
        "student@uni.edu",
        "admin@campusconnect.com.evil.io",
        "dean@uni.edu.",
    ])
    def test_other_emails(self, email):
        assert is_admin_email(email, ALLOW_LIST) is False

    def test_allow_list_is_case_normalized(self):
        assert is_admin_email("boss@uni.edu", {"Boss@Uni.EDU"}) is True

    def test_empty_allow_list(self):
        assert is_admin_email("admin@campusconnect.com", set()) is False


class TestAdminEmailSettings:
    def test_settings_normalize_admin_emails(self):
        s = Settings(admin_emails={" Boss@Uni.edu ", "", "dean@uni.edu"})
        assert s.admin_emails == {"boss@uni.edu", "dean@uni.edu"}

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("CAMPUS_ADMIN_EMAILS", '["Registrar@Uni.edu"]')
        assert Settings().admin_emails == {"registrar@uni.edu"}
