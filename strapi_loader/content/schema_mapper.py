"""Map Strapi content-type attributes onto pydantic validators.

Each Strapi attribute carries a ``type`` tag plus type-specific metadata
(allowed media kinds, relation target, nested properties...). The mapper
turns one attribute into a ``FieldSpec`` (annotation + default) and
``generate_schema`` assembles the specs into a model with ``create_model``.

Extend ``map_type_to_schema`` to add more types or change existing ones.
"""

from __future__ import annotations

import keyword
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Annotated, Any, Dict, List, Literal, Optional, Type, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    create_model,
)

from strapi_loader.core.config import settings
from strapi_loader.core.exceptions import InvalidFieldError, UnsupportedFieldTypeError
from strapi_loader.core.logging import get_logger

log = get_logger("content.schema_mapper")

REQUIRED = ...


# RFC 3339 in UTC, the only form Strapi emits: 2024-05-01T10:00:00.000Z
ISO_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z")


def _iso_datetime(value: str) -> str:
    if not ISO_DATETIME_RE.fullmatch(value):
        raise ValueError("Invalid ISO datetime")
    # Shape alone lets 2024-13-45 through
    datetime.fromisoformat(value[:19])
    return value


def _iso_date(value: str) -> str:
    date.fromisoformat(value)
    return value


def _iso_time(value: str) -> str:
    time.fromisoformat(value)
    return value


def _digits(value: str) -> str:
    if not re.fullmatch(r"-?\d+", value):
        raise ValueError("Invalid big integer")
    return value


IsoDateTimeStr = Annotated[StrictStr, AfterValidator(_iso_datetime)]
IsoDateStr = Annotated[StrictStr, AfterValidator(_iso_date)]
IsoTimeStr = Annotated[StrictStr, AfterValidator(_iso_time)]
Number = Union[StrictInt, StrictFloat]
# Postgres bigints reach the API as strings
BigInteger = Union[StrictInt, Annotated[StrictStr, AfterValidator(_digits)]]

STRING_TYPES = {"string", "uid", "richtext", "text", "email", "password"}
NUMBER_TYPES = {"number", "float", "decimal"}


@dataclass(frozen=True)
class FieldSpec:
    """A validator node: the annotation plus its default (``...`` when required)."""

    annotation: Any
    default: Any = REQUIRED

    @property
    def required(self) -> bool:
        return self.default is REQUIRED


def _literal(values: List[Any]) -> Any:
    return Literal[tuple(values)]


def _python_name(key: str, taken: set) -> str:
    """Turn an attribute key into a field name pydantic will accept."""
    name = key
    if not key.isidentifier() or keyword.iskeyword(key) or key.startswith("_") or hasattr(BaseModel, key):
        name = re.sub(r"\W", "_", key).strip("_") or "field"
        if name[0].isdigit():
            name = f"f_{name}"
        if keyword.iskeyword(name) or hasattr(BaseModel, name):
            name = f"{name}_"
    while name in taken:
        name = f"{name}_"
    return name


def build_model(model_name: str, specs: Dict[str, FieldSpec], extra: str = "ignore") -> Type[BaseModel]:
    """Assemble a model from attribute specs, aliasing keys that aren't valid field names."""
    fields: Dict[str, Any] = {}
    for key, spec in specs.items():
        name = _python_name(key, set(fields))
        if name == key:
            fields[name] = (spec.annotation, spec.default)
        else:
            fields[name] = (spec.annotation, Field(spec.default, alias=key))

    return create_model(
        model_name,
        __config__=ConfigDict(extra=extra, populate_by_name=True, protected_namespaces=()),
        **fields,
    )


def _model_name(name: str, suffix: str) -> str:
    parts = re.split(r"[^0-9a-zA-Z]+", name)
    return "".join(p[:1].upper() + p[1:] for p in parts if p) + suffix


def _media_spec(name: str, field: Dict[str, Any]) -> FieldSpec:
    allowed = field.get("allowedTypes")
    allowed_item = _literal(list(allowed)) if allowed else StrictStr
    model = build_model(
        _model_name(name, "Media"),
        {
            "allowedTypes": FieldSpec(List[allowed_item]),
            "type": FieldSpec(Literal["media"]),
            "multiple": FieldSpec(StrictBool),
            "url": FieldSpec(StrictStr),
            "alternativeText": FieldSpec(Optional[StrictStr], None),
            "caption": FieldSpec(Optional[StrictStr], None),
            "width": FieldSpec(Optional[Number], None),
            "height": FieldSpec(Optional[Number], None),
        },
    )
    return FieldSpec(model)


def _relation_spec(name: str, field: Dict[str, Any]) -> FieldSpec:
    relation = field.get("relation")
    target = field.get("target")
    model = build_model(
        _model_name(name, "Relation"),
        {
            "relation": FieldSpec(Literal[relation] if relation else StrictStr),
            "target": FieldSpec(Literal[target] if target else StrictStr),
            "configurable": FieldSpec(Optional[StrictBool], None),
            "writable": FieldSpec(Optional[StrictBool], None),
            "visible": FieldSpec(Optional[StrictBool], None),
            "useJoinTable": FieldSpec(Optional[StrictBool], None),
            "private": FieldSpec(Optional[StrictBool], None),
        },
    )
    return FieldSpec(Optional[model], None)


def _dynamic_zone_spec(name: str) -> FieldSpec:
    # Component payloads vary per component; only the tag is checked
    component = build_model(
        _model_name(name, "Component"),
        {"__component": FieldSpec(StrictStr)},
        extra="allow",
    )
    return FieldSpec(List[component])


def map_type_to_schema(
    field_type: str,
    field: Dict[str, Any],
    name: str = "field",
    policy: Optional[str] = None,
) -> FieldSpec:
    """Translate one Strapi field type (and its metadata) into a validator node."""
    policy = policy or settings.UNKNOWN_FIELD_POLICY

    if field_type in STRING_TYPES:
        return FieldSpec(StrictStr)
    if field_type == "datetime":
        return FieldSpec(IsoDateTimeStr)
    if field_type == "date":
        return FieldSpec(IsoDateStr)
    if field_type == "time":
        return FieldSpec(IsoTimeStr)
    if field_type == "boolean":
        return FieldSpec(StrictBool)
    if field_type in NUMBER_TYPES:
        return FieldSpec(Number)
    if field_type == "integer":
        return FieldSpec(StrictInt)
    if field_type == "biginteger":
        return FieldSpec(BigInteger)
    if field_type == "enumeration":
        values = field.get("enum")
        return FieldSpec(_literal(list(values)) if values else StrictStr)
    if field_type == "media":
        return _media_spec(name, field)
    if field_type == "relation":
        return _relation_spec(name, field)
    if field_type == "array":
        items = field.get("items")
        if not isinstance(items, dict) or "type" not in items:
            raise InvalidFieldError(f"{name}.items")
        item_spec = map_type_to_schema(items["type"], items, name=f"{name}_item", policy=policy)
        return FieldSpec(List[item_spec.annotation])
    if field_type == "object":
        specs: Dict[str, FieldSpec] = {}
        for key, value in (field.get("properties") or {}).items():
            if isinstance(value, dict) and "type" in value:
                specs[key] = map_type_to_schema(value["type"], value, name=key, policy=policy)
            else:
                log.error(f"Invalid field value for key: {key}")
                raise InvalidFieldError(key)
        return FieldSpec(build_model(_model_name(name, "Object"), specs))
    if field_type == "dynamiczone":
        return _dynamic_zone_spec(name)
    if field_type == "json":
        return FieldSpec(Any)
    if field_type == "blocks":
        return FieldSpec(List[Dict[str, Any]])

    if policy == "error":
        raise UnsupportedFieldTypeError(field_type)
    log.warning(f"Unsupported type: {field_type}. Falling back to any.")
    return FieldSpec(Any)


def generate_schema(
    attributes: Dict[str, Any],
    model_name: str = "ContentSchema",
    policy: Optional[str] = None,
) -> Type[BaseModel]:
    """Build the collection model from a Strapi ``attributes`` map."""
    specs: Dict[str, FieldSpec] = {}
    for key, value in attributes.items():
        if not isinstance(value, dict) or "type" not in value:
            raise InvalidFieldError(key)
        rest = {k: v for k, v in value.items() if k != "type"}
        specs[key] = map_type_to_schema(value["type"], rest, name=key, policy=policy)
    return build_model(model_name, specs)
