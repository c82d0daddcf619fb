import httpx
import pytest

from capsule_closet.core.tags import normalize_facet, normalize_many, normalize_subcategory, normalize_tag


def test_normalize_tag():
    assert normalize_tag("  Denim Dark ") == "denim-dark"
    assert normalize_tag("A-Line") == "a-line"
    assert normalize_tag("Crème") == "creme"
    with pytest.raises(ValueError):
        normalize_tag("   ")


def test_normalize_many_dedupes_in_order():
    assert normalize_many(["Minimal", "classic", "MINIMAL"]) == ["minimal", "classic"]


def test_facets_are_checked_against_taxonomy():
    assert normalize_facet("color", "Navy") == "navy"
    with pytest.raises(ValueError, match="invalid_color"):
        normalize_facet("color", "chartreuse")
    with pytest.raises(ValueError, match="invalid_category"):
        normalize_facet("category", "")


def test_subcategory_is_scoped_to_category():
    assert normalize_subcategory("shoes", "Sneakers") == "sneakers"
    assert normalize_subcategory("shoes", None) == ""
    with pytest.raises(ValueError, match="invalid_subcategory"):
        normalize_subcategory("shoes", "blazer")


@pytest.mark.asyncio
async def test_taxonomy_endpoint(anon_client: httpx.AsyncClient):
    resp = await anon_client.get("/v1/taxonomy")
    assert resp.status_code == 200
    facets = resp.json()["facets"]
    assert facets["category"]["values"] == ["top", "bottom", "dress", "outerwear", "shoes", "bag", "accessory"]
    assert "blazer" in facets["subcategory"]["by_category"]["outerwear"]


@pytest.mark.asyncio
async def test_health(anon_client: httpx.AsyncClient):
    resp = await anon_client.get("/v1/health")
    assert resp.json() == {"status": "ok", "database": True}
