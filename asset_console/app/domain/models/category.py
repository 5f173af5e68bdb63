from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


class _FieldBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    label: str = Field(min_length=1)
    required: bool = False
    placeholder: str | None = None


class TextField(_FieldBase):
    type: Literal["text"] = "text"


class TextareaField(_FieldBase):
    type: Literal["textarea"] = "textarea"


class NumberField(_FieldBase):
    type: Literal["number"] = "number"
    min: float | None = None
    max: float | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> "NumberField":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min must be less than or equal to max")
        return self


class SelectField(_FieldBase):
    type: Literal["select"] = "select"
    options: list[str] = Field(min_length=1)


class CheckboxField(_FieldBase):
    type: Literal["checkbox"] = "checkbox"


class DateField(_FieldBase):
    type: Literal["date"] = "date"


DynamicField = Annotated[
    Union[TextField, TextareaField, NumberField, SelectField, CheckboxField, DateField],
    Field(discriminator="type"),
]

_DYNAMIC_FIELDS = TypeAdapter(list[DynamicField])


class Category(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    title: str = Field(min_length=2)
    slug: str = Field(min_length=2)
    description: str | None = None
    icon: str | None = None
    dynamic_fields: list[DynamicField] = Field(default_factory=list)
    is_active: bool = True
    display_order: int = 0
    created_at: str | None = None
    updated_at: str | None = None


class DynamicDataError(ValueError):
    """Raised with every problem found in an asset's dynamic data."""

    def __init__(self, problems: dict[str, str]) -> None:
        self.problems = problems
        super().__init__("; ".join(f"{name}: {problem}" for name, problem in problems.items()))


def parse_dynamic_fields(raw: Any) -> list[DynamicField]:
    return _DYNAMIC_FIELDS.validate_python(raw or [])


def validate_dynamic_data(fields: list[DynamicField], data: dict[str, Any] | None) -> dict[str, Any]:
    data = data or {}
    cleaned: dict[str, Any] = {}
    problems: dict[str, str] = {}
    for field in fields:
        raw = data.get(field.name)
        if raw is None or raw == "":
            if field.required:
                problems[field.name] = f"{field.label} is required"
            continue
        try:
            cleaned[field.name] = _coerce(field, raw)
        except ValueError as exc:
            problems[field.name] = str(exc)
    if problems:
        raise DynamicDataError(problems)
    return cleaned


def _coerce(field: DynamicField, raw: Any) -> Any:
    if isinstance(field, (TextField, TextareaField)):
        return str(raw)
    if isinstance(field, NumberField):
        return _coerce_number(field, raw)
    if isinstance(field, SelectField):
        value = str(raw)
        if value not in field.options:
            raise ValueError(f"{field.label} must be one of: {', '.join(field.options)}")
        return value
    if isinstance(field, CheckboxField):
        return _coerce_bool(field, raw)
    try:
        return date.fromisoformat(raw.isoformat() if isinstance(raw, date) else str(raw)).isoformat()
    except ValueError:
        raise ValueError(f"{field.label} must be a date (YYYY-MM-DD)") from None


def _coerce_number(field: NumberField, raw: Any) -> int | float:
    if isinstance(raw, bool):
        raise ValueError(f"{field.label} must be a number")
    try:
        number = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{field.label} must be a number") from None
    if field.min is not None and number < field.min:
        raise ValueError(f"{field.label} must be at least {field.min:g}")
    if field.max is not None and number > field.max:
        raise ValueError(f"{field.label} must be at most {field.max:g}")
    return int(number) if number.is_integer() else number


def _coerce_bool(field: CheckboxField, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    normalized = str(raw).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"{field.label} must be true or false")
