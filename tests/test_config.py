import pytest

from review_moderation.core.config import Settings, parse_cors
from review_moderation.database.enums import ReviewStatus


def test_parse_cors_comma_list():
    assert parse_cors("http://a.test, http://b.test,") == ["http://a.test", "http://b.test"]


def test_parse_cors_passes_lists_through():
    assert parse_cors(["http://a.test"]) == ["http://a.test"]


def test_parse_cors_rejects_other_types():
    with pytest.raises(ValueError):
        parse_cors(42)


def test_cors_origins_include_frontend_host(monkeypatch):
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", "http://localhost:5173/,http://127.0.0.1:5500")
    monkeypatch.setenv("FRONTEND_HOST", "http://localhost:3000")

    s = Settings()

    assert s.all_cors_origins == [
        "http://localhost:5173",
        "http://127.0.0.1:5500",
        "http://localhost:3000",
    ]


def test_identity_headers_are_configurable(monkeypatch):
    monkeypatch.setenv("AUTH_USER_ID_HEADER", "X-Forwarded-User")

    assert Settings().AUTH_USER_ID_HEADER == "X-Forwarded-User"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("pending", ReviewStatus.PENDING),
        ("APPROVED", ReviewStatus.APPROVED),
        (" Rejected", ReviewStatus.REJECTED),
        ("archived", None),
        ("", None),
        (None, None),
    ],
)
def test_review_status_parse(raw, expected):
    assert ReviewStatus.parse(raw) is expected
