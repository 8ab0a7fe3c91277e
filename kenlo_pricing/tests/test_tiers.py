"""
Tests: tiered (graduated) pricing.

Run with:
    pytest kenlo_pricing/tests/test_tiers.py -v
"""

import pytest

from kenlo_pricing.rules.tiers import (
    effective_unit_price,
    format_tier_breakdown,
    tiered_breakdown,
    tiered_cost,
)


def _all_tables(catalog):
    costs = catalog.variable_costs
    tables = [costs.whatsapp_leads, costs.signatures]
    for per_plan in (costs.additional_users, costs.additional_contracts, costs.boleto_split):
        tables.extend(per_plan.values())
    return tables


class TestTieredCost:
    def test_zero_and_negative_quantities_cost_nothing(self, catalog):
        for tiers in _all_tables(catalog):
            assert tiered_cost(0, tiers) == 0
            assert tiered_cost(-5, tiers) == 0
            assert tiered_breakdown(0, tiers) == []

    @pytest.mark.parametrize(
        "plan, quantity, expected",
        [
            ("prime", 3, 171),
            ("k", 3, 141),
            ("k", 5, 235),
            ("k", 6, 272),
            ("k2", 110, 2970),
        ],
    )
    def test_additional_users(self, catalog, plan, quantity, expected):
        assert tiered_cost(quantity, catalog.user_tiers(plan)) == expected

    def test_contracts_cross_a_tier_boundary(self, catalog):
        assert tiered_cost(300, catalog.contract_tiers("k")) == 875

    def test_boletos_on_k_plan(self, catalog):
        assert tiered_cost(300, catalog.boleto_split_tiers("k")) == 1175

    def test_whatsapp_four_bands_is_exact(self, catalog):
        assert tiered_cost(400, catalog.variable_costs.whatsapp_leads) == 550
        assert tiered_cost(1100, catalog.variable_costs.whatsapp_leads) == 300 + 195 + 715 + 90

    def test_monotonic_in_quantity(self, catalog):
        for tiers in _all_tables(catalog):
            previous = 0
            for quantity in range(0, 1200, 3):
                cost = tiered_cost(quantity, tiers)
                assert cost >= previous
                previous = cost

    def test_average_price_never_rises_with_volume(self, catalog):
        for tiers in _all_tables(catalog):
            previous = float("inf")
            for quantity in range(1, 1200, 5):
                average = effective_unit_price(quantity, tiers)
                assert average <= previous + 1e-9
                previous = average


class TestTieredBreakdown:
    def test_bands_for_contracts(self, catalog):
        bands = tiered_breakdown(300, catalog.contract_tiers("k"))
        assert [(b.quantity, b.unit_price, b.subtotal) for b in bands] == [
            (250, 3.0, 750.0),
            (50, 2.5, 125.0),
        ]
        assert bands[-1].end is None

    def test_bands_sum_to_cost(self, catalog):
        for tiers in _all_tables(catalog):
            for quantity in (1, 17, 250, 251, 777, 1500):
                bands = tiered_breakdown(quantity, tiers)
                assert sum(b.quantity for b in bands) == quantity
                assert sum(b.subtotal for b in bands) == pytest.approx(tiered_cost(quantity, tiers))

    def test_format(self, catalog):
        bands = tiered_breakdown(300, catalog.contract_tiers("k"))
        assert format_tier_breakdown(bands) == "250 × R$ 3,00 + 50 × R$ 2,50"

    def test_effective_unit_price(self, catalog):
        assert effective_unit_price(0, catalog.contract_tiers("k")) == 0
        assert effective_unit_price(300, catalog.contract_tiers("k")) == pytest.approx(875 / 300)
