import pytest

from treasury_core.domain.models import InstrumentDescriptor
from treasury_core.services.catalog import DEFAULT_CATALOG, InstrumentCatalog, milestone_months


def test_default_catalog_lookup():
    fintual = DEFAULT_CATALOG.find("fintual")
    assert fintual is not None
    assert fintual.min_horizon_months == 6
    assert fintual.risk == "medium"
    assert DEFAULT_CATALOG.find("nope") is None
    assert DEFAULT_CATALOG.ids() == ["tenpo", "mercadopago", "fintual", "agg", "vti"]
    assert "vti" in DEFAULT_CATALOG
    assert len(DEFAULT_CATALOG) == 5


def test_duplicate_ids_rejected():
    item = InstrumentDescriptor(id="x", name="X", annual_rate=0.05, risk="low", min_horizon_months=3, color="#000")
    with pytest.raises(ValueError):
        InstrumentCatalog([item, item])


def test_unknown_risk_tier_rejected():
    with pytest.raises(ValueError):
        InstrumentDescriptor(id="x", name="X", annual_rate=0.05, risk="extreme", min_horizon_months=3, color="#000")


def test_milestone_steps():
    assert milestone_months(12) == [12, 24, 36]
    assert milestone_months(6) == [6, 12, 18, 24, 30, 36]
    assert milestone_months(3) == list(range(3, 37, 3))
    assert len(milestone_months(3)) == 12


def test_milestone_step_must_be_supported():
    with pytest.raises(ValueError):
        milestone_months(4)
