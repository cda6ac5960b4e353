"""Hypothesis custom strategies for PBT."""
import string
from typing import Any, Dict

from hypothesis import strategies as st


def st_index_name() -> st.SearchStrategy[str]:
    """Lowercase index names such as products_20240101."""
    return st.text(alphabet=string.ascii_lowercase + string.digits + "_-", min_size=1, max_size=30).filter(
        lambda s: s[0] not in "_-"
    )


def st_json_value() -> st.SearchStrategy[Any]:
    return st.recursive(
        st.none() | st.booleans() | st.integers() | st.text(max_size=20),
        lambda children: st.lists(children, max_size=3) | st.dictionaries(st.text(max_size=10), children, max_size=3),
        max_leaves=10,
    )


def st_request_params() -> st.SearchStrategy[Dict[str, Any]]:
    """Arbitrary request parameter mappings, including the reserved "client" key."""
    keys = st.sampled_from(["index", "body", "timeout", "size", "from", "routing", "refresh", "client"]) | st.text(
        max_size=15
    )
    return st.dictionaries(keys, st_json_value(), max_size=8)
