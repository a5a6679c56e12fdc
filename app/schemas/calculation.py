# app/schemas/calculation.py

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.services.landed_cost import ImportInputs


SellingPrice = Annotated[float, Field(gt=0, allow_inf_nan=False)]


def _default_selling_prices() -> dict[str, float]:
    return {"shopee": 150.0, "mercado_livre": 160.0}


class ImportInputsIn(BaseModel):
    """
    Parâmetros da importação. Os limites aqui são a validação de entrada:
    o cálculo em si não rejeita nada.
    """
    quantity: int = Field(default=100, gt=0)
    unit_price_usd: float = Field(default=10.0, gt=0, allow_inf_nan=False)
    freight_usd: float = Field(default=50.0, ge=0, allow_inf_nan=False)

    # None = usa câmbio/ICMS padrão das configurações
    exchange_rate: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    icms_rate: Optional[float] = Field(default=None, ge=0, lt=100, allow_inf_nan=False)

    selling_prices: dict[str, SellingPrice] = Field(default_factory=_default_selling_prices)

    def to_inputs(self, exchange_rate: float, icms_rate: float) -> ImportInputs:
        return ImportInputs(
            quantity=self.quantity,
            unit_price_usd=self.unit_price_usd,
            freight_usd=self.freight_usd,
            exchange_rate=exchange_rate,
            icms_rate=icms_rate,
            selling_prices=dict(self.selling_prices),
        )


class CustomsCostRequest(ImportInputsIn):
    scenario: str = "full"
    # se informado, substitui a razão do cenário
    declaration_ratio: Optional[float] = Field(default=None, ge=0, le=1, allow_inf_nan=False)


class LandedCostRequest(ImportInputsIn):
    active_scenario: str = "full"


class MarginRequest(BaseModel):
    marketplace: str = "shopee"
    selling_price: float = Field(gt=0, allow_inf_nan=False)
    unit_cost: float = Field(allow_inf_nan=False)

    # sobrescrevem a tabela do marketplace
    fee_percent: Optional[float] = Field(default=None, ge=0, lt=1, allow_inf_nan=False)
    fixed_fee: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    threshold: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)


class CalculationResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    declared_product_total: float
    product_total: float
    freight_total: float
    customs_value: float
    import_tax: float
    icms: float
    total_taxes: float
    total_import_cost: float
    unit_cost: float
    is_degenerate: bool = False


class ScenarioCostOut(CalculationResultOut):
    scenario: str
    label: str
    declaration_ratio: float


class MarketplaceMarginOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    marketplace: str
    label: str
    selling_price: float
    fee_percent: float
    fixed_fee: float
    total_fee: float
    profit: float
    margin_percent: float
    is_profitable: bool


class DeclarationScenarioOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    ratio: float


class FeeScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    fee_percent: float
    fixed_fee: float
    threshold: float


class LandedCostReportOut(BaseModel):
    active_scenario: str
    quantity: int
    exchange_rate: float
    icms_rate: float

    scenarios: dict[str, ScenarioCostOut] = Field(default_factory=dict)
    margins: dict[str, MarketplaceMarginOut] = Field(default_factory=dict)

    # valores formatados em pt-BR ("R$ 1.234,56")
    display: dict[str, str] = Field(default_factory=dict)
