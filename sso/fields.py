from __future__ import annotations

import urllib.parse
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable

from discourse_sso.constants import LOGGER


class FieldCategory(Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    LIST = "list"


STRING_FIELDS = (
    "avatar_url",
    "bio",
    "card_background_url",
    "email",
    "external_id",
    "locale",
    "name",
    "nonce",
    "profile_background_url",
    "return_sso_url",
    "title",
    "username",
    "website",
)

BOOLEAN_FIELDS = (
    "admin",
    "avatar_force_update",
    "locale_force_update",
    "moderator",
    "require_activation",
    "suppress_welcome_message",
)

LIST_FIELDS = (
    "add_groups",
    "groups",
    "remove_groups",
)

FIELD_CATEGORIES: dict[str, FieldCategory] = {
    **{name: FieldCategory.STRING for name in STRING_FIELDS},
    **{name: FieldCategory.BOOLEAN for name in BOOLEAN_FIELDS},
    **{name: FieldCategory.LIST for name in LIST_FIELDS},
}

_NON_SCALAR_TYPES = (Mapping, list, tuple, set, frozenset, bytes, bytearray)


class _WrongShape(Exception):
    pass


def category_for(name: str) -> FieldCategory | None:
    return FIELD_CATEGORIES.get(name)


def is_known_field(name: str) -> bool:
    return name in FIELD_CATEGORIES


def _render_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, _NON_SCALAR_TYPES):
        raise _WrongShape
    return str(value)


def _quote(text: str) -> str:
    return urllib.parse.quote_plus(text, safe="")


def _encode_string(name: str, value: Any) -> str | None:
    return f"{name}={_quote(_render_scalar(value))}"


def _encode_boolean(name: str, value: Any) -> str | None:
    if not isinstance(value, bool):
        raise _WrongShape
    # False is a valid value, it just has no wire form.
    if value is True:
        return f"{name}=true"
    return None


def _encode_list(name: str, value: Any) -> str | None:
    if not isinstance(value, (list, tuple)):
        raise _WrongShape
    if not value:
        return None
    joined = ",".join(_render_scalar(item) for item in value)
    return f"{name}={_quote(joined)}"


_ENCODERS: dict[FieldCategory, Callable[[str, Any], str | None]] = {
    FieldCategory.STRING: _encode_string,
    FieldCategory.BOOLEAN: _encode_boolean,
    FieldCategory.LIST: _encode_list,
}


def encode_field(name: str, value: Any) -> str | None:
    """Render one attribute as a ``name=value`` query fragment.

    Returns ``None`` when the field has no wire form: unknown names, a
    ``False`` flag, an empty list, or a value of the wrong shape for its
    category. Unknown names and wrong shapes are logged, never raised, so a
    bad optional attribute cannot block signing the core identity fields.
    """
    category = category_for(name)
    if category is None:
        LOGGER.warning("Discourse SSO: Discarding unknown field: %s", name)
        return None

    try:
        return _ENCODERS[category](name, value)
    except _WrongShape:
        LOGGER.warning(
            "Discourse SSO: Invalid value for: %s (expected %s)", name, category.value
        )
        return None
