"""Tests for the HPP calculator."""

import math

import pytest

from bisnisflow.hpp import CostComponent, CostSection, HPPCalculation, default_sections


@pytest.fixture
def calc():
    return HPPCalculation(
        sections=[
            CostSection("Raw Material", [CostComponent("Kopi", 300000), CostComponent("Susu", 200000)]),
            CostSection("Packaging", [CostComponent("Cup", 100000)]),
        ],
        batch_size=100,
        desired_margin=50,
        marketplace_fee_percent=10,
        target_revenue=9_000_000,
        target_roas=5,
    )


class TestHPPCalculation:
    def test_unit_cost_and_price(self, calc):
        assert calc.total_production_cost == 600000
        assert calc.hpp_per_unit == 6000
        assert calc.suggested_price == pytest.approx(9000)
        assert calc.admin_fee == pytest.approx(900)
        assert calc.net_profit_per_unit == pytest.approx(2100)

    def test_margin_and_roas(self, calc):
        assert calc.real_gross_margin == pytest.approx(2100 / 9000)
        assert calc.break_even_roas == pytest.approx(9000 / 2100)

    def test_monthly_targets(self, calc):
        assert calc.target_sales_qty == 1000
        assert calc.max_ad_spend == pytest.approx(1_800_000)
        assert calc.projected_monthly_net_profit == pytest.approx(1000 * 2100 - 1_800_000)

    def test_sales_qty_rounds_up(self, calc):
        calc.target_revenue = 9_000_001
        assert calc.target_sales_qty == math.ceil(9_000_001 / 9000)

    def test_zero_batch(self, calc):
        calc.batch_size = 0
        assert calc.hpp_per_unit == 0
        assert calc.suggested_price == 0
        assert calc.target_sales_qty == 0
        assert calc.break_even_roas == 0

    def test_negative_margin_has_no_break_even(self, calc):
        calc.desired_margin = 0
        calc.marketplace_fee_percent = 20
        assert calc.real_gross_margin < 0
        assert calc.break_even_roas == 0

    def test_zero_target_roas(self, calc):
        calc.target_roas = 0
        assert calc.max_ad_spend == 0

    def test_component_costs_are_coerced(self):
        section = CostSection("Misc", [CostComponent("a", "1500"), CostComponent("b", "oops")])
        assert section.total == 1500

    def test_default_sections_are_fresh(self):
        a, b = default_sections(), default_sections()
        a[0].items.append(CostComponent("x", 1))
        assert len(b[0].items) == 1


class TestToProduct:
    def test_saved_product(self, calc):
        product = calc.to_product("  Kopi Botol ", "Minuman", min_stock=7)
        assert product.name == "Kopi Botol"
        assert product.category == "Minuman"
        assert product.hpp == 6000
        assert product.price == pytest.approx(9000)
        assert product.stock == 0
        assert product.min_stock == 7
        assert product.id

    def test_blank_category_becomes_general(self, calc):
        assert calc.to_product("Kopi", "  ").category == "General"
        assert calc.to_product("Kopi", None).category == "General"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_name_required(self, calc, name):
        with pytest.raises(ValueError):
            calc.to_product(name)
