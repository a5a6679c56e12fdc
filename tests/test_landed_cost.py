import math
from dataclasses import replace

import pytest

from app.services.landed_cost import (
    IMPORT_TAX_RATE,
    FeeSchedule,
    ImportInputs,
    compute_customs_cost,
    compute_margin,
    compute_marketplace_margin,
)


def test_full_declaration_reference_values(reference_inputs):
    result = compute_customs_cost(reference_inputs, 1.0)

    assert result.declared_product_total == pytest.approx(5400.0)
    assert result.product_total == pytest.approx(5400.0)
    assert result.freight_total == pytest.approx(270.0)
    assert result.customs_value == pytest.approx(5670.0)
    assert result.import_tax == pytest.approx(3402.0)
    # 9072 * 0,19 / 0,81
    assert result.icms == pytest.approx(9072 * 0.19 / 0.81)
    assert result.total_taxes == pytest.approx(3402.0 + 9072 * 0.19 / 0.81)
    assert result.total_import_cost == pytest.approx(5400 + 270 + 3402 + 9072 * 0.19 / 0.81)
    assert result.unit_cost == pytest.approx(112.0, abs=0.01)
    assert not result.is_degenerate


def test_reduced_declaration_reference_values(reference_inputs):
    result = compute_customs_cost(reference_inputs, 0.3)

    assert result.declared_product_total == pytest.approx(1620.0)
    assert result.customs_value == pytest.approx(1890.0)
    assert result.import_tax == pytest.approx(1134.0)
    assert result.icms == pytest.approx(709.33, abs=0.01)
    assert result.total_taxes == pytest.approx(1843.33, abs=0.01)
    # produto real continua 5400
    assert result.product_total == pytest.approx(5400.0)
    assert result.total_import_cost == pytest.approx(7513.33, abs=0.01)
    assert result.unit_cost == pytest.approx(75.13, abs=0.01)


@pytest.mark.parametrize("ratio", [0.0, 0.3, 0.5, 0.75, 1.0])
def test_real_product_total_does_not_depend_on_ratio(reference_inputs, ratio):
    full = compute_customs_cost(reference_inputs, 1.0)
    other = compute_customs_cost(reference_inputs, ratio)

    assert other.product_total == full.product_total
    assert other.freight_total == full.freight_total


@pytest.mark.parametrize("ratio", [0.0, 0.1, 0.3, 0.8])
def test_declared_total_scales_linearly_with_ratio(reference_inputs, ratio):
    full = compute_customs_cost(reference_inputs, 1.0)
    other = compute_customs_cost(reference_inputs, ratio)

    assert other.declared_product_total == pytest.approx(ratio * full.declared_product_total)


def test_import_tax_is_sixty_percent_of_customs_value(reference_inputs):
    for ratio in (1.0, 0.3):
        result = compute_customs_cost(reference_inputs, ratio)
        assert IMPORT_TAX_RATE == 0.60
        assert result.import_tax == result.customs_value * 0.60


def test_icms_is_non_negative_and_increasing(reference_inputs):
    rates = [0, 1, 4, 7, 12, 17, 18, 19, 20.5, 25, 50, 75, 99, 99.9]
    values = [
        compute_customs_cost(replace(reference_inputs, icms_rate=rate), 1.0).icms
        for rate in rates
    ]

    assert values[0] == 0
    assert all(v >= 0 for v in values)
    assert all(b > a for a, b in zip(values, values[1:]))


def test_unit_cost_times_quantity_is_total_cost():
    inputs = ImportInputs(
        quantity=37,
        unit_price_usd=3.17,
        freight_usd=12.5,
        exchange_rate=5.123,
        icms_rate=18,
    )
    result = compute_customs_cost(inputs, 0.3)

    assert result.unit_cost * inputs.quantity == pytest.approx(result.total_import_cost)


def test_free_freight_and_zero_icms():
    inputs = ImportInputs(quantity=10, unit_price_usd=2.0, freight_usd=0.0, exchange_rate=5.0, icms_rate=0)
    result = compute_customs_cost(inputs, 1.0)

    assert result.freight_total == 0
    assert result.icms == 0
    assert result.total_taxes == pytest.approx(60.0)
    assert result.unit_cost == pytest.approx(16.0)


def test_icms_of_one_hundred_percent_does_not_raise(reference_inputs):
    result = compute_customs_cost(replace(reference_inputs, icms_rate=100), 1.0)

    assert math.isinf(result.icms)
    assert math.isinf(result.unit_cost)
    assert result.is_degenerate


def test_zero_quantity_does_not_raise(reference_inputs):
    result = compute_customs_cost(replace(reference_inputs, quantity=0), 1.0)

    assert result.product_total == 0
    assert not math.isfinite(result.unit_cost)
    assert result.is_degenerate


def test_zero_quantity_and_no_freight_gives_nan():
    inputs = ImportInputs(quantity=0, unit_price_usd=10.0, freight_usd=0.0, exchange_rate=5.4, icms_rate=19)
    result = compute_customs_cost(inputs, 1.0)

    assert math.isnan(result.unit_cost)


def test_margin_reference_example():
    margin = compute_margin(150.0, 112.01, 0.20, 3.0)

    assert margin.total_fee == pytest.approx(30.0)
    assert margin.profit == pytest.approx(7.99)
    assert margin.margin_percent == pytest.approx(5.3267, abs=1e-3)
    assert margin.is_profitable


def test_margin_identities():
    margin = compute_margin(99.9, 45.5, 0.17, 6.0)

    assert margin.profit == pytest.approx(margin.selling_price - margin.total_fee - 45.5)
    assert margin.margin_percent == pytest.approx(100 * margin.profit / margin.selling_price)


def test_fixed_fee_not_applied_at_threshold():
    margin = compute_margin(79.0, 10.0, 0.20, 3.0)

    assert margin.total_fee == pytest.approx(79.0 * 0.20)


def test_fixed_fee_applied_just_below_threshold():
    margin = compute_margin(78.99, 10.0, 0.20, 3.0)

    assert margin.total_fee == pytest.approx(78.99 * 0.20 + 3.0)


def test_custom_threshold():
    assert compute_margin(100.0, 0.0, 0.1, 5.0, threshold=120).total_fee == pytest.approx(15.0)
    assert compute_margin(100.0, 0.0, 0.1, 5.0, threshold=100).total_fee == pytest.approx(10.0)


def test_negative_margin_is_not_profitable():
    margin = compute_margin(50.0, 75.13, 0.17, 6.0)

    assert margin.profit < 0
    assert margin.margin_percent < 0
    assert not margin.is_profitable


def test_zero_selling_price_does_not_raise():
    margin = compute_margin(0.0, 10.0, 0.20, 3.0)

    assert margin.profit == pytest.approx(-13.0)
    assert not math.isfinite(margin.margin_percent)
    assert not margin.is_profitable


def test_marketplace_margin_uses_schedule():
    schedule = FeeSchedule(key="mercado_livre", label="Mercado Livre", fee_percent=0.17, fixed_fee=6.0)
    margin = compute_marketplace_margin(60.0, 20.0, schedule)

    assert margin.fee_percent == 0.17
    assert margin.fixed_fee == 6.0
    assert margin.total_fee == pytest.approx(60.0 * 0.17 + 6.0)
