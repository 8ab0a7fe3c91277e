"""
Tests: catalog loading, validation, hashing and lookups.

Run with:
    pytest kenlo_pricing/tests/test_catalog.py -v
"""

import hashlib

import pytest

from kenlo_pricing.catalog.loader import CatalogStore, get_catalog_store, load_catalog
from kenlo_pricing.config import DEFAULT_CATALOG_PATH
from kenlo_pricing.models.enums import KomboType, PaymentFrequency, PlanTier, ProductLine
from kenlo_pricing.models.errors import CatalogError, PricingError, UnknownCatalogKeyError


class TestDefaultCatalog:
    def test_hash_is_sha256_of_file(self, catalog):
        expected = hashlib.sha256(DEFAULT_CATALOG_PATH.read_bytes()).hexdigest()
        assert catalog.content_hash == expected

    def test_frequencies(self, catalog):
        multipliers = {f: rule.multiplier for f, rule in catalog.frequencies.items()}
        assert multipliers == {
            PaymentFrequency.MONTHLY: 1.25,
            PaymentFrequency.SEMESTRAL: 1.125,
            PaymentFrequency.ANNUAL: 1.0,
            PaymentFrequency.BIENNIAL: 0.875,
        }
        assert [rule.installments for rule in catalog.frequencies.values()] == [1, 2, 3, 6]

    def test_plans(self, catalog):
        assert catalog.plan("imob", "k").annual_price == 497
        assert catalog.plan(ProductLine.LOC, PlanTier.K2).included == 500
        assert catalog.imob.plans[PlanTier.K].included == 7
        assert catalog.imob.implementation == catalog.loc.implementation == 1497

    def test_addons(self, catalog):
        assert catalog.addon("leads").requires == ProductLine.IMOB
        assert catalog.addon("inteligencia").requires is None
        assert catalog.addon("pay").annual_price == 0

    def test_kombos(self, catalog):
        assert list(catalog.kombos) == [
            KomboType.IMOB_START,
            KomboType.IMOB_PRO,
            KomboType.LOCACAO_PRO,
            KomboType.CORE_GESTAO,
            KomboType.ELITE,
        ]
        assert catalog.kombo("elite").discount == 0.20
        assert catalog.kombo(KomboType.NONE) is None
        assert all(definition.implementation == 1497 for definition in catalog.kombos.values())

    def test_prepaid_and_seguros(self, catalog):
        assert catalog.prepaid.discount_multiplier == 0.90
        assert catalog.seguros.revenue_per_contract == 10


class TestLookups:
    @pytest.mark.parametrize(
        "lookup",
        [
            lambda c: c.plan("imob", "k3"),
            lambda c: c.plan("crm", "k"),
            lambda c: c.addon("crm"),
            lambda c: c.multiplier("quarterly"),
            lambda c: c.kombo("mega"),
            lambda c: c.user_tiers("gold"),
        ],
    )
    def test_unknown_keys_raise(self, catalog, lookup):
        with pytest.raises(UnknownCatalogKeyError):
            lookup(catalog)

    def test_unknown_key_error_is_a_key_error(self, catalog):
        with pytest.raises(KeyError):
            catalog.addon("crm")
        with pytest.raises(PricingError, match="Unknown add-on: 'crm'"):
            catalog.addon("crm")


class TestCatalogValidation:
    def test_round_trip_through_file(self, catalog_data, write_catalog):
        loaded = load_catalog(write_catalog(catalog_data))
        assert loaded.version == catalog_data["version"]

    def test_hash_changes_with_content(self, catalog_data, write_catalog):
        first = load_catalog(write_catalog(catalog_data, "a.json"))
        catalog_data["version"] = "2099.9"
        second = load_catalog(write_catalog(catalog_data, "b.json"))
        assert first.content_hash != second.content_hash

    def test_tier_gap_rejected(self, catalog_data, write_catalog):
        catalog_data["variable_costs"]["additional_users"]["k"][1]["from"] = 8
        with pytest.raises(CatalogError, match="starts at 8"):
            load_catalog(write_catalog(catalog_data))

    def test_bounded_last_tier_rejected(self, catalog_data, write_catalog):
        catalog_data["variable_costs"]["signatures"][-1]["to"] = 100
        with pytest.raises(CatalogError, match="unbounded"):
            load_catalog(write_catalog(catalog_data))

    def test_missing_plan_table_rejected(self, catalog_data, write_catalog):
        del catalog_data["variable_costs"]["boleto_split"]["k2"]
        with pytest.raises(CatalogError, match="missing plans"):
            load_catalog(write_catalog(catalog_data))

    def test_missing_frequency_rejected(self, catalog_data, write_catalog):
        del catalog_data["frequencies"]["biennial"]
        with pytest.raises(CatalogError):
            load_catalog(write_catalog(catalog_data))

    def test_kombo_requiring_and_forbidding_same_addon_rejected(self, catalog_data, write_catalog):
        catalog_data["kombos"]["imob_start"]["forbidden_addons"] = ["leads"]
        with pytest.raises(CatalogError, match="both required and forbidden"):
            load_catalog(write_catalog(catalog_data))

    def test_invalid_json_rejected(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="not valid JSON"):
            load_catalog(path)

    def test_missing_file_rejected(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read"):
            load_catalog(tmp_path / "absent.json")


class TestCatalogStore:
    def test_caches_until_reload(self, catalog_data, write_catalog):
        path = write_catalog(catalog_data)
        store = CatalogStore(path)
        first = store.get()
        assert store.get() is first

        catalog_data["version"] = "2099.9"
        write_catalog(catalog_data)
        assert store.get().version == first.version
        assert store.current_hash() != first.content_hash
        assert store.reload().version == "2099.9"

    def test_one_store_per_path(self, catalog_data, write_catalog):
        path = write_catalog(catalog_data)
        assert get_catalog_store(path) is get_catalog_store(str(path))
        assert get_catalog_store(path) is not get_catalog_store(DEFAULT_CATALOG_PATH)
