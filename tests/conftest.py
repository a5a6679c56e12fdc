import pytest

from app.core.config import Settings
from app.services.landed_cost import ImportInputs


ENV_VARS = (
    "CORS_ORIGINS",
    "LOG_LEVEL",
    "DEFAULT_EXCHANGE_RATE",
    "DEFAULT_ICMS_RATE",
    "FETCH_LIVE_EXCHANGE_RATE",
    "FULL_DECLARATION_RATIO",
    "REDUCED_DECLARATION_RATIO",
    "SHOPEE_FEE_PERCENT",
    "SHOPEE_FIXED_FEE",
    "ML_FEE_PERCENT",
    "ML_FIXED_FEE",
    "MARKETPLACE_FEE_THRESHOLD",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def config(clean_env) -> Settings:
    return Settings()


@pytest.fixture
def reference_inputs() -> ImportInputs:
    # 100 un. x US$ 10, frete US$ 50, câmbio 5,40, ICMS SP 19%
    return ImportInputs(
        quantity=100,
        unit_price_usd=10.0,
        freight_usd=50.0,
        exchange_rate=5.40,
        icms_rate=19,
        selling_prices={"shopee": 150.0, "mercado_livre": 160.0},
    )
