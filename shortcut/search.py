# =============================================================================
# shortcut/search.py  -  Filter dict → Shortcut search query
# =============================================================================
#
# Shortcut's search endpoints take a single query string made of operators:
#
#     title:"Sprint 12" state:started team:mobile !is:archived
#
# The MCP tools accept a structured filter instead (easier for an LLM to fill
# in correctly), and build_search_query() translates one into the other.
#
# KEY MAPPING:
#   name        → title          (Shortcut calls it "title" in search)
#   startDate   → startdate      (camelCase keys are lowercased)
#   isArchived  → is:archived
#   hasOwner    → has:owner
#
# VALUE MAPPING:
#   owner/requester == "me"  → the current user's mention name
#   True / False             → key / !key
#   "two words"              → key:"two words"
#   anything else            → key:value
# =============================================================================

from typing import Any, Mapping, Optional

from shortcut.models import Member

_KEY_RENAMES = {"name": "title"}
_SELF_REFERENCING_KEYS = {"owner", "requester"}


def _map_key_name(key: str) -> str:
    lowered = key.lower()
    return _KEY_RENAMES.get(lowered, lowered)


def _operator(key: str) -> str:
    if key.startswith("is") and key[2:3].isupper():
        return f"is:{_map_key_name(key[2:])}"
    if key.startswith("has") and key[3:4].isupper():
        return f"has:{_map_key_name(key[3:])}"
    return _map_key_name(key)


def build_search_query(filters: Mapping[str, Any], current_user: Optional[Member] = None) -> str:
    """Translate a filter mapping into a Shortcut search query string.

    None values are skipped.  Terms keep the mapping's insertion order, so the
    same filter always produces the same query.
    """
    terms = []
    for key, value in filters.items():
        if value is None:
            continue
        operator = _operator(key)

        if key in _SELF_REFERENCING_KEYS and value == "me":
            value = current_user.mention_name if current_user else value

        # bool before int: True is an int in Python.
        if isinstance(value, bool):
            terms.append(operator if value else f"!{operator}")
        elif isinstance(value, str) and " " in value:
            terms.append(f'{operator}:"{value}"')
        else:
            terms.append(f"{operator}:{value}")

    return " ".join(terms)
