from __future__ import annotations

from dataclasses import dataclass

from app.core.config import Settings
from app.services.landed_cost import FeeSchedule


FULL = "full"
REDUCED = "reduced"

SHOPEE = "shopee"
MERCADO_LIVRE = "mercado_livre"


@dataclass(frozen=True)
class DeclarationScenario:
    key: str
    label: str
    ratio: float


def declaration_scenarios(config: Settings) -> dict[str, DeclarationScenario]:
    """Cenários de invoice comparados lado a lado (ordem = ordem de exibição)."""
    full = DeclarationScenario(
        key=FULL,
        label=f"Invoice {config.FULL_DECLARATION_RATIO * 100:.0f}%",
        ratio=config.FULL_DECLARATION_RATIO,
    )
    reduced = DeclarationScenario(
        key=REDUCED,
        label=f"Invoice {config.REDUCED_DECLARATION_RATIO * 100:.0f}%",
        ratio=config.REDUCED_DECLARATION_RATIO,
    )
    return {s.key: s for s in (full, reduced)}


def marketplace_fees(config: Settings) -> dict[str, FeeSchedule]:
    shopee = FeeSchedule(
        key=SHOPEE,
        label="Shopee",
        fee_percent=config.SHOPEE_FEE_PERCENT,
        fixed_fee=config.SHOPEE_FIXED_FEE,
        threshold=config.MARKETPLACE_FEE_THRESHOLD,
    )
    mercado_livre = FeeSchedule(
        key=MERCADO_LIVRE,
        label="Mercado Livre",
        fee_percent=config.ML_FEE_PERCENT,
        fixed_fee=config.ML_FIXED_FEE,
        threshold=config.MARKETPLACE_FEE_THRESHOLD,
    )
    return {m.key: m for m in (shopee, mercado_livre)}


def get_scenario(scenarios: dict[str, DeclarationScenario], key: str) -> DeclarationScenario:
    scenario = scenarios.get(key)
    if scenario is None:
        raise ValueError(f"Scenario '{key}' not found")
    return scenario


def get_fee_schedule(fees: dict[str, FeeSchedule], key: str) -> FeeSchedule:
    schedule = fees.get(key)
    if schedule is None:
        raise ValueError(f"Marketplace '{key}' not found")
    return schedule
