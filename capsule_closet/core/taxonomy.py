import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

TAXONOMY_PATH = Path(__file__).resolve().parent.parent / "taxonomy.v1.json"


@lru_cache(maxsize=1)
def get_taxonomy() -> Dict[str, Any]:
    """Allowed closet tag values per facet, loaded once."""
    return json.loads(TAXONOMY_PATH.read_text())


def allowed_values(facet: str) -> List[str]:
    return get_taxonomy()["facets"][facet]["values"]


def subcategories_for(category: str) -> List[str]:
    by_category = get_taxonomy()["facets"]["subcategory"]["by_category"]
    return by_category.get(category, [])
