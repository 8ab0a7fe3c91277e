"""
Tests: licence line items, bundle discounts and implementation waivers.

Run with:
    pytest kenlo_pricing/tests/test_line_items.py -v
"""

import pytest
from pydantic import ValidationError

from kenlo_pricing.models.enums import KomboType, PaymentFrequency, PlanTier, ProductSelection
from kenlo_pricing.models.schemas import LineItem
from kenlo_pricing.models.state import AddonsState, QuoteConfig
from kenlo_pricing.rules.kombo import apply_kombo_selection, detect_kombo
from kenlo_pricing.rules.line_items import build_line_items, total_implementation, total_monthly


def _priced(config, catalog, frequency=None):
    kombo = detect_kombo(config.product, config.addons, catalog)
    return kombo, build_line_items(config, kombo, catalog, frequency=frequency)


class TestBuildLineItems:
    def test_single_product_without_kombo(self, catalog):
        kombo, items = _priced(QuoteConfig(product="imob", imob_plan="k"), catalog)
        assert kombo == KomboType.NONE
        assert len(items) == 1
        item = items[0]
        assert item.name == "Imob - K"
        assert item.monthly_ref_sem_kombo == 627
        assert item.price_sem_kombo == item.price_com_kombo == 497
        assert item.implantation == 1497

    def test_names(self, catalog):
        config = QuoteConfig(
            product="both", imob_plan="prime", loc_plan="k2",
            addons=AddonsState(leads=True, inteligencia=True),
        )
        _, items = _priced(config, catalog)
        assert [item.name for item in items] == ["Imob - Prime", "Loc - K²", "Leads", "Inteligência"]

    def test_imob_pro_prices(self, catalog):
        config = QuoteConfig(product="imob", addons=AddonsState(leads=True, inteligencia=True, assinatura=True))
        kombo, items = _priced(config, catalog)
        assert kombo == KomboType.IMOB_PRO
        assert [item.key for item in items] == ["imob", "leads", "inteligencia", "assinatura"]
        assert [item.price_sem_kombo for item in items] == [497, 497, 297, 37]
        assert [item.price_com_kombo for item in items] == [422, 422, 252, 31]
        assert total_monthly(items, kombo) == 1127
        assert total_implementation(items) == 1497

    def test_addons_without_licence_price_have_no_line(self, catalog):
        config = QuoteConfig(product="loc", addons=AddonsState(pay=True, seguros=True, cash=True))
        _, items = _priced(config, catalog)
        assert [item.key for item in items] == ["loc"]

    def test_unavailable_addon_has_no_line(self, catalog):
        config = QuoteConfig(product="loc", addons=AddonsState(leads=True))
        _, items = _priced(config, catalog)
        assert [item.key for item in items] == ["loc"]

    def test_implementation_without_kombo(self, catalog):
        config = QuoteConfig(product="imob", addons=AddonsState(leads=True, inteligencia=True))
        _, items = _priced(config, catalog)
        assert total_implementation(items) == 1497 + 497 + 497

    def test_frequency_override(self, catalog):
        config = QuoteConfig(product="imob", frequency="annual")
        _, items = _priced(config, catalog, frequency=PaymentFrequency.MONTHLY)
        assert items[0].price_sem_kombo == 627


class TestBundleInvariants:
    def test_discount_never_raises_a_price(self, catalog):
        for kombo, definition in catalog.kombos.items():
            product = definition.required_products[0]
            addons = apply_kombo_selection(kombo, product, AddonsState(), catalog)
            for plan in PlanTier:
                for frequency in PaymentFrequency:
                    config = QuoteConfig(
                        product=product, imob_plan=plan, loc_plan=plan, addons=addons, frequency=frequency,
                    )
                    for item in build_line_items(config, kombo, catalog):
                        assert item.price_com_kombo <= item.price_sem_kombo
                        assert item.monthly_ref_com_kombo <= item.monthly_ref_sem_kombo
                        assert item.implantation >= 0

    def test_waived_fees_sum_to_kombo_implementation(self, catalog):
        for kombo, definition in catalog.kombos.items():
            product = definition.required_products[0]
            addons = apply_kombo_selection(kombo, product, AddonsState(), catalog)
            config = QuoteConfig(product=product, addons=addons)
            assert detect_kombo(product, addons, catalog) == kombo
            items = build_line_items(config, kombo, catalog)
            assert total_implementation(items) == definition.implementation == 1497

    def test_core_gestao_charges_only_loc_implementation(self, catalog):
        config = QuoteConfig(product=ProductSelection.BOTH)
        items = build_line_items(config, KomboType.CORE_GESTAO, catalog)
        assert {item.key: item.implantation for item in items} == {"imob": 0, "loc": 1497}

    def test_line_item_rejects_bundle_price_above_list(self):
        with pytest.raises(ValidationError):
            LineItem(
                key="imob", name="Imob - K",
                monthly_ref_sem_kombo=627, monthly_ref_com_kombo=564,
                price_sem_kombo=497, price_com_kombo=498, implantation=1497,
            )
