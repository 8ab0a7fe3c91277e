"""
Tests: revenue from boletos, splits and insurance.

Run with:
    pytest kenlo_pricing/tests/test_revenue.py -v
"""

from kenlo_pricing.models.state import AddonsState, MetricsState
from kenlo_pricing.models.enums import ProductSelection
from kenlo_pricing.rules.revenue import compute_revenue

PAY_METRICS = MetricsState(
    contracts_under_management=300,
    charges_boleto_to_tenant=True,
    boleto_charge_amount=6,
    charges_split_to_owner=True,
    split_charge_amount=4,
)


class TestRevenue:
    def test_boleto_and_split(self, catalog):
        revenue = compute_revenue(ProductSelection.LOC, AddonsState(pay=True), PAY_METRICS, catalog)
        assert revenue.boleto_revenue == 1800
        assert revenue.split_revenue == 1200
        assert revenue.payment_revenue == 3000
        assert revenue.seguros_revenue == 0
        assert revenue.total == 3000

    def test_seguros_per_contract(self, catalog):
        revenue = compute_revenue(ProductSelection.BOTH, AddonsState(seguros=True), PAY_METRICS, catalog)
        assert revenue.seguros_revenue == 3000
        assert revenue.payment_revenue == 0

    def test_pay_off_means_no_payment_revenue(self, catalog):
        revenue = compute_revenue(ProductSelection.LOC, AddonsState(), PAY_METRICS, catalog)
        assert revenue.total == 0

    def test_imob_only_earns_nothing(self, catalog):
        addons = AddonsState(pay=True, seguros=True)
        assert compute_revenue(ProductSelection.IMOB, addons, PAY_METRICS, catalog).total == 0

    def test_typed_amounts(self, catalog):
        metrics = MetricsState(
            contracts_under_management="1.000",
            charges_boleto_to_tenant=True,
            boleto_charge_amount="R$ 7,50",
        )
        revenue = compute_revenue(ProductSelection.LOC, AddonsState(pay=True), metrics, catalog)
        assert revenue.boleto_revenue == 7500
