from capsule_closet.services.styling import generate_capsule
from capsule_closet.services.styling.capsule import MAX_GAPS
from tests.fixtures import doubled_closet, item


def test_every_item_is_selected_in_order():
    catalog = doubled_closet()
    selected, _ = generate_capsule(catalog)
    assert [it.id for it in selected] == [it.id for it in catalog]


def test_empty_closet_caps_gaps_in_priority_order():
    selected, gaps = generate_capsule([])
    assert selected == []
    assert len(gaps) == MAX_GAPS
    assert [g.category for g in gaps] == ["top", "bottom", "dress", "outerwear", "shoes", "bag"]
    bottom = gaps[1]
    assert (bottom.color, bottom.silhouette) == ("black", "straight")
    assert bottom.reason == "A black trouser would unlock 5+ outfit combinations"
    assert gaps[0].reason == "A top would unlock 5+ outfit combinations"
    assert gaps[0].color == "neutral"


def test_missing_bag_is_suggested_twice():
    _, gaps = generate_capsule(doubled_closet())
    assert [g.category for g in gaps] == ["dress", "bag", "bag"]
    assert (gaps[1].color, gaps[1].silhouette) == ("neutral", "straight")
    assert (gaps[2].color, gaps[2].silhouette) == ("black", "medium")
    assert gaps[2].reason == "A versatile bag would complete your daily looks"


def test_missing_outerwear_gets_the_blazer_gap():
    catalog = [it for it in doubled_closet() if it.category != "outerwear"]
    catalog.append(item("bag1", "bag", "black", "tote"))
    catalog.append(item("bag2", "bag", "camel", "crossbody"))
    _, gaps = generate_capsule(catalog)
    assert [g.category for g in gaps] == ["dress", "outerwear", "outerwear"]
    assert gaps[2].reason == "A neutral blazer would create 8+ professional looks"
    assert (gaps[2].color, gaps[2].silhouette) == ("neutral", "fitted")


def test_single_items_ask_for_a_second_one():
    catalog = [
        item("t", "top", "white"),
        item("b", "bottom", "black"),
        item("d", "dress", "red"),
        item("o", "outerwear", "camel"),
        item("s", "shoes", "black"),
        item("g", "bag", "black"),
        item("a1", "accessory", "camel"),
    ]
    _, gaps = generate_capsule(catalog)
    assert [g.category for g in gaps] == ["top", "bottom", "dress", "outerwear", "shoes", "bag"]
    assert (gaps[0].color, gaps[0].silhouette) == ("neutral", "fitted")
    assert (gaps[1].color, gaps[1].silhouette) == ("blue", "straight")
    assert gaps[3].reason == "An additional outerwear would create more outfit variety"


def test_single_accessory_is_not_a_gap():
    catalog = [
        item("t1", "top", "white"),
        item("t2", "top", "black"),
        item("b1", "bottom", "black"),
        item("b2", "bottom", "navy"),
        item("d1", "dress", "red"),
        item("d2", "dress", "black"),
        item("o1", "outerwear", "camel"),
        item("o2", "outerwear", "black"),
        item("s1", "shoes", "black"),
        item("s2", "shoes", "white"),
        item("g1", "bag", "black"),
        item("g2", "bag", "camel"),
        item("a1", "accessory", "camel"),
    ]
    _, gaps = generate_capsule(catalog)
    assert gaps == []
