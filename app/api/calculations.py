# app/api/calculations.py

from __future__ import annotations

from dataclasses import asdict
from typing import List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from app.core.config import Settings, get_settings
from app.schemas.calculation import (
    CustomsCostRequest,
    DeclarationScenarioOut,
    FeeScheduleOut,
    ImportInputsIn,
    LandedCostReportOut,
    LandedCostRequest,
    MarginRequest,
    MarketplaceMarginOut,
    ScenarioCostOut,
)
from app.services.exchange import resolve_exchange_rate
from app.services.landed_cost import (
    CalculationResult,
    FeeSchedule,
    ImportInputs,
    MarketplaceMargin,
    compute_customs_cost,
    compute_margin,
)
from app.services.report import build_landed_cost_report, report_display
from app.services.scenarios import (
    DeclarationScenario,
    declaration_scenarios,
    get_fee_schedule,
    get_scenario,
    marketplace_fees,
)


router = APIRouter(prefix="/calculations", tags=["calculations"])


def _raise_for_value_error(e: ValueError) -> NoReturn:
    msg = str(e).lower()
    if "not found" in msg:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _scenario_out(scenario: DeclarationScenario, result: CalculationResult) -> ScenarioCostOut:
    return ScenarioCostOut(
        scenario=scenario.key,
        label=scenario.label,
        declaration_ratio=scenario.ratio,
        is_degenerate=result.is_degenerate,
        **asdict(result),
    )


def _margin_out(schedule: FeeSchedule, margin: MarketplaceMargin) -> MarketplaceMarginOut:
    return MarketplaceMarginOut(
        marketplace=schedule.key,
        label=schedule.label,
        is_profitable=margin.is_profitable,
        **asdict(margin),
    )


async def _resolve_inputs(payload: ImportInputsIn, config: Settings) -> ImportInputs:
    exchange_rate = await resolve_exchange_rate(payload.exchange_rate, config)
    icms_rate = payload.icms_rate if payload.icms_rate is not None else config.DEFAULT_ICMS_RATE
    return payload.to_inputs(exchange_rate=exchange_rate, icms_rate=icms_rate)


@router.get("/scenarios", response_model=List[DeclarationScenarioOut])
def list_scenarios(config: Settings = Depends(get_settings)):
    """
    Cenários de declaração configurados (Invoice 100% / Invoice 30%).
    """
    return list(declaration_scenarios(config).values())


@router.get("/marketplaces", response_model=List[FeeScheduleOut])
def list_marketplaces(config: Settings = Depends(get_settings)):
    """
    Tabelas de tarifas dos marketplaces (comissão + taxa fixa abaixo do limite).
    """
    return list(marketplace_fees(config).values())


@router.post("/customs-cost", response_model=ScenarioCostOut)
async def calculate_customs_cost(
    payload: CustomsCostRequest,
    config: Settings = Depends(get_settings),
):
    """
    Custo de importação para um único cenário de declaração.
    """
    try:
        scenario = get_scenario(declaration_scenarios(config), payload.scenario)
    except ValueError as e:
        _raise_for_value_error(e)

    if payload.declaration_ratio is not None:
        scenario = DeclarationScenario(
            key=scenario.key,
            label=f"Invoice {payload.declaration_ratio * 100:.0f}%",
            ratio=payload.declaration_ratio,
        )

    inputs = await _resolve_inputs(payload, config)
    result = compute_customs_cost(inputs, scenario.ratio)
    if result.is_degenerate:
        logger.warning("Cálculo aduaneiro com valores não finitos: {}", result)

    return _scenario_out(scenario, result)


@router.post("/margin", response_model=MarketplaceMarginOut)
def calculate_margin(
    payload: MarginRequest,
    config: Settings = Depends(get_settings),
):
    """
    Lucro e margem por unidade em um marketplace.
    """
    try:
        schedule = get_fee_schedule(marketplace_fees(config), payload.marketplace)
    except ValueError as e:
        _raise_for_value_error(e)

    # overrides pontuais da tabela do marketplace
    schedule = FeeSchedule(
        key=schedule.key,
        label=schedule.label,
        fee_percent=payload.fee_percent if payload.fee_percent is not None else schedule.fee_percent,
        fixed_fee=payload.fixed_fee if payload.fixed_fee is not None else schedule.fixed_fee,
        threshold=payload.threshold if payload.threshold is not None else schedule.threshold,
    )

    margin = compute_margin(
        payload.selling_price,
        payload.unit_cost,
        schedule.fee_percent,
        schedule.fixed_fee,
        threshold=schedule.threshold,
    )
    return _margin_out(schedule, margin)


@router.post("/landed-cost", response_model=LandedCostReportOut)
async def calculate_landed_cost(
    payload: LandedCostRequest,
    config: Settings = Depends(get_settings),
):
    """
    Comparativo completo:
    - custo de importação em todos os cenários (100% e 30%)
    - margem por marketplace usando o custo unitário do cenário ativo
    """
    scenarios = declaration_scenarios(config)
    fees = marketplace_fees(config)
    inputs = await _resolve_inputs(payload, config)

    try:
        report = build_landed_cost_report(
            inputs,
            scenarios,
            fees,
            active_scenario=payload.active_scenario,
        )
    except ValueError as e:
        _raise_for_value_error(e)

    return LandedCostReportOut(
        active_scenario=report.active_scenario,
        quantity=inputs.quantity,
        exchange_rate=inputs.exchange_rate,
        icms_rate=inputs.icms_rate,
        scenarios={
            key: _scenario_out(scenarios[key], result)
            for key, result in report.scenarios.items()
        },
        margins={
            key: _margin_out(fees[key], margin)
            for key, margin in report.margins.items()
        },
        display=report_display(report),
    )
