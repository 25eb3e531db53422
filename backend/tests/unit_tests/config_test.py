import pytest
from pydantic import ValidationError

from fitleague.config import DEVELOPMENT_JWT_SECRET, CIConfig, DevelopmentConfig, ProductionConfig


def test_production_requires_jwt_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JWT_SECRET", raising=False)

    with pytest.raises(ValidationError) as exc_info:
        ProductionConfig(_env_file=None)  # type: ignore[call-arg]

    assert exc_info.value.errors()[0]["loc"] == ("jwt_secret",)


def test_production_reads_jwt_secret_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "a-long-and-private-production-signing-key")

    config = ProductionConfig(_env_file=None)  # type: ignore[call-arg]

    assert config.jwt_secret == "a-long-and-private-production-signing-key"


def test_non_production_configs_fall_back_to_development_secret(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("JWT_SECRET", raising=False)

    assert CIConfig(_env_file=None).jwt_secret == DEVELOPMENT_JWT_SECRET  # type: ignore[call-arg]
    assert (
        DevelopmentConfig(_env_file=None).jwt_secret  # type: ignore[call-arg]
        == DEVELOPMENT_JWT_SECRET
    )
