"""
Tests: VIP support and dedicated CS inclusion and pricing.

Run with:
    pytest kenlo_pricing/tests/test_premium.py -v
"""

from kenlo_pricing.models.enums import KomboType
from kenlo_pricing.rules.premium import compute_premium_services


class TestPremiumServices:
    def test_included_in_k_plan(self, catalog, make_config):
        config = make_config(product="imob", imob_plan="k", imob_vip_support=True, imob_dedicated_cs=True)
        premium = compute_premium_services(config, KomboType.NONE, catalog)
        assert premium.vip_included
        assert premium.vip_price == 0
        assert not premium.cs_included
        assert premium.cs_price == 297
        assert premium.total == 297

    def test_billed_on_prime(self, catalog, make_config):
        config = make_config(product="imob", imob_plan="prime", imob_vip_support=True)
        premium = compute_premium_services(config, KomboType.NONE, catalog)
        assert premium.vip_price == 97
        assert premium.cs_price == 0
        assert premium.has_premium_services

    def test_inclusion_in_one_product_applies_to_both(self, catalog, make_config):
        config = make_config(
            product="both", imob_plan="prime", loc_plan="k2", imob_vip_support=True, imob_dedicated_cs=True,
        )
        premium = compute_premium_services(config, KomboType.NONE, catalog)
        assert premium.vip_included and premium.cs_included
        assert premium.total == 0

    def test_any_kombo_includes_both(self, catalog, make_config):
        config = make_config(
            product="imob", imob_plan="prime", addons=["leads", "assinatura"],
            imob_vip_support=True, imob_dedicated_cs=True,
        )
        premium = compute_premium_services(config, KomboType.IMOB_START, catalog)
        assert premium.vip_included and premium.cs_included
        assert premium.total == 0

    def test_requests_for_unselected_product_ignored(self, catalog, make_config):
        config = make_config(product="imob", imob_plan="prime", loc_vip_support=True)
        premium = compute_premium_services(config, KomboType.NONE, catalog)
        assert not premium.vip_requested
        assert premium.total == 0
        assert not premium.has_premium_services
