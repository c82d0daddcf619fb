from .auth_fixtures import TEST_USER, OTHER_USER, auth_headers
from .closet_fixtures import (
    item,
    item_payload,
    everyday_trio,
    starter_closet,
    doubled_closet,
)

__all__ = [
    "TEST_USER",
    "OTHER_USER",
    "auth_headers",
    "item",
    "item_payload",
    "everyday_trio",
    "starter_closet",
    "doubled_closet",
]
