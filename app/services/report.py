from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from app.services.formatting import format_brl, format_percent
from app.services.landed_cost import (
    CalculationResult,
    FeeSchedule,
    ImportInputs,
    MarketplaceMargin,
    compute_customs_cost,
    compute_marketplace_margin,
)
from app.services.scenarios import FULL, DeclarationScenario, get_scenario


@dataclass(frozen=True)
class LandedCostReport:
    inputs: ImportInputs
    active_scenario: str
    scenarios: dict[str, CalculationResult]
    margins: dict[str, MarketplaceMargin]

    @property
    def active_result(self) -> CalculationResult:
        return self.scenarios[self.active_scenario]


def build_landed_cost_report(
    inputs: ImportInputs,
    scenarios: dict[str, DeclarationScenario],
    fee_schedules: dict[str, FeeSchedule],
    active_scenario: str = FULL,
) -> LandedCostReport:
    """
    Calcula todos os cenários de declaração e as margens por marketplace.

    A margem usa o custo unitário do cenário ativo. Marketplaces sem preço de
    venda informado ficam de fora.
    """
    get_scenario(scenarios, active_scenario)

    results: dict[str, CalculationResult] = {}
    for key, scenario in scenarios.items():
        result = compute_customs_cost(inputs, scenario.ratio)
        if result.is_degenerate:
            logger.warning(
                "Cenário {} gerou valores não finitos (qtd={}, icms={}%)",
                key,
                inputs.quantity,
                inputs.icms_rate,
            )
        results[key] = result

    unit_cost = results[active_scenario].unit_cost

    margins: dict[str, MarketplaceMargin] = {}
    for key, schedule in fee_schedules.items():
        price = inputs.selling_prices.get(key)
        if price is None:
            continue
        margins[key] = compute_marketplace_margin(price, unit_cost, schedule)

    logger.debug(
        "Relatório: cenário ativo={} custo unit.={:.4f} marketplaces={}",
        active_scenario,
        unit_cost,
        list(margins),
    )

    return LandedCostReport(
        inputs=inputs,
        active_scenario=active_scenario,
        scenarios=results,
        margins=margins,
    )


def report_display(report: LandedCostReport) -> dict[str, str]:
    """Valores já formatados (pt-BR) para a UI."""
    display: dict[str, str] = {}
    for key, result in report.scenarios.items():
        display[f"unit_cost_{key}"] = format_brl(result.unit_cost)
        display[f"total_import_cost_{key}"] = format_brl(result.total_import_cost)
    for key, margin in report.margins.items():
        display[f"profit_{key}"] = format_brl(margin.profit)
        display[f"margin_{key}"] = format_percent(margin.margin_percent)
    return display
