from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping


# Imposto de Importação (II) fixo em 60% do valor aduaneiro
IMPORT_TAX_RATE = 0.60

# Preço abaixo do qual o marketplace cobra a taxa fixa
DEFAULT_FEE_THRESHOLD = 79.0


@dataclass(frozen=True)
class ImportInputs:
    quantity: int
    unit_price_usd: float
    freight_usd: float          # frete total da remessa
    exchange_rate: float        # USD -> BRL
    icms_rate: float            # em %, ex.: 19
    selling_prices: Mapping[str, float] = field(default_factory=dict)  # marketplace -> preço em BRL


@dataclass(frozen=True)
class CalculationResult:
    declared_product_total: float  # conforme a invoice (100% ou 30%)
    product_total: float           # valor real pago ao fornecedor (sempre 100%)
    freight_total: float
    customs_value: float
    import_tax: float
    icms: float
    total_taxes: float
    total_import_cost: float
    unit_cost: float

    @property
    def is_degenerate(self) -> bool:
        return not all(
            math.isfinite(v)
            for v in (
                self.customs_value,
                self.icms,
                self.total_import_cost,
                self.unit_cost,
            )
        )


@dataclass(frozen=True)
class FeeSchedule:
    key: str
    label: str
    fee_percent: float
    fixed_fee: float
    threshold: float = DEFAULT_FEE_THRESHOLD


@dataclass(frozen=True)
class MarketplaceMargin:
    selling_price: float
    fee_percent: float
    fixed_fee: float
    total_fee: float
    profit: float
    margin_percent: float

    @property
    def is_profitable(self) -> bool:
        # NaN compara como False
        return self.margin_percent > 0


def _div(numerator: float, denominator: float) -> float:
    """Divisão que devolve inf/nan em vez de levantar ZeroDivisionError."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def compute_customs_cost(inputs: ImportInputs, declaration_ratio: float) -> CalculationResult:
    """
    Custo de importação para um cenário de declaração.

    - valor aduaneiro = produto declarado + frete
    - II = 60% do valor aduaneiro
    - ICMS "por dentro": (valor aduaneiro + II) * icms / (1 - icms)
    - custo total usa sempre o valor REAL do produto; só a base dos impostos
      muda com o cenário

    Não valida nada: com ICMS = 100% ou quantidade 0 o resultado vem com
    inf/nan (ver CalculationResult.is_degenerate).
    """
    declared_unit_price = inputs.unit_price_usd * declaration_ratio
    declared_product_total = inputs.quantity * declared_unit_price * inputs.exchange_rate
    freight_total = inputs.freight_usd * inputs.exchange_rate

    customs_value = declared_product_total + freight_total
    import_tax = customs_value * IMPORT_TAX_RATE

    icms_decimal = inputs.icms_rate / 100
    icms = (customs_value + import_tax) * _div(icms_decimal, 1 - icms_decimal)

    total_taxes = import_tax + icms

    real_product_total = inputs.quantity * inputs.unit_price_usd * inputs.exchange_rate
    total_import_cost = real_product_total + freight_total + total_taxes
    unit_cost = _div(total_import_cost, inputs.quantity)

    return CalculationResult(
        declared_product_total=declared_product_total,
        product_total=real_product_total,
        freight_total=freight_total,
        customs_value=customs_value,
        import_tax=import_tax,
        icms=icms,
        total_taxes=total_taxes,
        total_import_cost=total_import_cost,
        unit_cost=unit_cost,
    )


def compute_margin(
    selling_price: float,
    unit_cost: float,
    fee_percent: float,
    fixed_fee: float,
    threshold: float = DEFAULT_FEE_THRESHOLD,
) -> MarketplaceMargin:
    # taxa fixa só para itens abaixo do limite (comparação estrita)
    total_fee = selling_price * fee_percent + (fixed_fee if selling_price < threshold else 0.0)
    profit = selling_price - total_fee - unit_cost
    margin_percent = _div(profit, selling_price) * 100

    return MarketplaceMargin(
        selling_price=selling_price,
        fee_percent=fee_percent,
        fixed_fee=fixed_fee,
        total_fee=total_fee,
        profit=profit,
        margin_percent=margin_percent,
    )


def compute_marketplace_margin(
    selling_price: float,
    unit_cost: float,
    schedule: FeeSchedule,
) -> MarketplaceMargin:
    return compute_margin(
        selling_price,
        unit_cost,
        schedule.fee_percent,
        schedule.fixed_fee,
        threshold=schedule.threshold,
    )
