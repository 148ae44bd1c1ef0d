"""Form parsing shared by every entity form."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError

from sinema.schemas.base import ApiModel

NUMBER_MESSAGE = "Doit être un nombre"
INTEGER_MESSAGE = "Doit être un nombre entier"

# Text input that must not be blank
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

_REQUIRED_ERRORS = {"missing", "string_too_short"}
_NUMBER_ERRORS = {"float_parsing", "float_type", "finite_number"}
_INTEGER_ERRORS = {"int_parsing", "int_type", "int_from_float"}


@dataclass
class Field:
    """How a form field is rendered."""

    name: str
    label: str
    kind: str = "text"  # text, url, number, checkbox, select, datetime-local
    choices: list[tuple[str, str]] = field(default_factory=list)
    placeholder: str | None = None
    step: str | None = None
    disabled: bool = False
    reload: bool = False  # re-render the dialog when the value changes


@dataclass
class FormResult:
    """Outcome of parsing a submitted form."""

    values: dict[str, Any]
    form: "EntityForm | None" = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.form is not None and not self.errors


class EntityForm(BaseModel, ABC):
    """
    Base class for entity forms.

    Fields are named after the HTML inputs. Empty inputs count as missing,
    so a required field left blank reports its ``required_messages`` entry.
    Unchecked checkboxes are absent from the submission and fall back to
    the field default. Numbers must be finite, since the backend only
    accepts JSON numbers.

    Subclasses provide the payload mapping (``to_create``, ``to_update``)
    and the dialog contents (``initial``, ``layout``).
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore", allow_inf_nan=False)

    required_messages: ClassVar[dict[str, str]] = {}

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> FormResult:
        values = {key: value for key, value in data.items() if value != ""}
        try:
            form = cls.model_validate(values)
        except ValidationError as e:
            return FormResult(values=dict(data), errors=cls._field_errors(e))
        return FormResult(values=dict(data), form=form)

    @classmethod
    def _field_errors(cls, error: ValidationError) -> dict[str, str]:
        errors: dict[str, str] = {}
        for item in error.errors():
            name = str(item["loc"][0]) if item["loc"] else "__all__"
            if name in errors:
                continue
            if item["type"] in _REQUIRED_ERRORS:
                errors[name] = cls.required_messages.get(name, "Ce champ est requis")
            elif item["type"] in _NUMBER_ERRORS:
                errors[name] = NUMBER_MESSAGE
            elif item["type"] in _INTEGER_ERRORS:
                errors[name] = INTEGER_MESSAGE
            else:
                errors[name] = item["msg"].removeprefix("Value error, ")
        return errors

    @abstractmethod
    def to_create(self) -> ApiModel:
        """Payload for creating a new entity."""

    @abstractmethod
    def to_update(self, id: str) -> ApiModel:
        """Payload for updating the entity *id*."""

    def to_payload(self, existing_id: str | None) -> ApiModel:
        """Update payload when editing an existing entity, create payload otherwise."""
        if existing_id is not None:
            return self.to_update(existing_id)
        return self.to_create()

    @classmethod
    @abstractmethod
    def initial(cls, entity: Any | None = None, **context: Any) -> dict[str, Any]:
        """Values shown when the dialog opens."""

    @classmethod
    @abstractmethod
    def layout(cls, values: Mapping[str, Any], **lists: Any) -> list[Field]:
        """Fields to render, with dropdown choices built from *lists*."""
