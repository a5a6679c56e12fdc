# app/core/config.py

import os
from dotenv import load_dotenv

# Caminho da raiz do projeto (onde está o main.py e o .env)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
ENV_PATH = os.path.join(BASE_DIR, ".env")

# Carrega variáveis do arquivo .env, se existir
if os.path.exists(ENV_PATH):
    load_dotenv(ENV_PATH)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw.replace(",", "."))


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on", "sim")


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    def __init__(self) -> None:
        # Front (Next em localhost:3000)
        self.CORS_ORIGINS: list[str] = _env_list(
            "CORS_ORIGINS",
            ["http://localhost:3000", "http://127.0.0.1:3000"],
        )
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Câmbio e ICMS padrão (SP) quando o payload não informa
        self.DEFAULT_EXCHANGE_RATE: float = _env_float("DEFAULT_EXCHANGE_RATE", 5.40)
        self.DEFAULT_ICMS_RATE: float = _env_float("DEFAULT_ICMS_RATE", 19.0)
        self.FETCH_LIVE_EXCHANGE_RATE: bool = _env_bool("FETCH_LIVE_EXCHANGE_RATE", False)

        # Cenários de declaração (fração do preço real informada na invoice)
        self.FULL_DECLARATION_RATIO: float = _env_float("FULL_DECLARATION_RATIO", 1.0)
        self.REDUCED_DECLARATION_RATIO: float = _env_float("REDUCED_DECLARATION_RATIO", 0.3)

        # Tarifas dos marketplaces
        self.SHOPEE_FEE_PERCENT: float = _env_float("SHOPEE_FEE_PERCENT", 0.20)
        self.SHOPEE_FIXED_FEE: float = _env_float("SHOPEE_FIXED_FEE", 3.0)
        self.ML_FEE_PERCENT: float = _env_float("ML_FEE_PERCENT", 0.17)
        self.ML_FIXED_FEE: float = _env_float("ML_FIXED_FEE", 6.0)
        # Abaixo desse preço a taxa fixa é cobrada
        self.MARKETPLACE_FEE_THRESHOLD: float = _env_float("MARKETPLACE_FEE_THRESHOLD", 79.0)


settings = Settings()


# Dependência para usar em endpoints (permite sobrescrever nos testes)
def get_settings() -> Settings:
    return settings
