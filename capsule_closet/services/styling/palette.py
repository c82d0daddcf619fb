NEUTRAL_COLORS = {"black", "white", "cream", "camel", "navy", "grey"}
WARM_COLORS = {"brown", "red", "yellow", "orange"}
COOL_COLORS = {"blue", "denim-dark", "denim-light", "green"}

GOOD_COMBOS = {
    frozenset(pair)
    for pair in (
        ("black", "white"),
        ("black", "red"),
        ("black", "blue"),
        ("white", "navy"),
        ("cream", "brown"),
        ("navy", "white"),
    )
}


def compatible(c1: str, c2: str) -> bool:
    """Whether two item colors can be worn together.

    Neutrals go with everything, a color goes with itself, warm pairs with
    warm and cool with cool; anything else must be a listed combination.
    """
    if c1 in NEUTRAL_COLORS or c2 in NEUTRAL_COLORS:
        return True
    if c1 == c2:
        return True
    if c1 in WARM_COLORS and c2 in WARM_COLORS:
        return True
    if c1 in COOL_COLORS and c2 in COOL_COLORS:
        return True
    return frozenset((c1, c2)) in GOOD_COMBOS
