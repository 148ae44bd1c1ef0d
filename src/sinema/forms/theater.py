"""Theater form."""

from collections.abc import Mapping
from typing import Any, ClassVar

from sinema.forms.base import EntityForm, Field, RequiredText
from sinema.schemas import Theater, TheaterCreate, TheaterUpdate


class TheaterForm(EntityForm):
    required_messages: ClassVar[dict[str, str]] = {
        "name": "Le nom est requis",
        "insee_code": "Le code INSEE est requis",
        "website": "Le site web est requis",
    }

    name: RequiredText
    insee_code: RequiredText
    website: RequiredText
    picture_url: str | None = None
    wheelchair: bool = False
    three_d: bool = False

    def to_create(self) -> TheaterCreate:
        return TheaterCreate(**self.model_dump())

    def to_update(self, id: str) -> TheaterUpdate:
        return TheaterUpdate(id=id, **self.model_dump())

    @classmethod
    def initial(cls, entity: Theater | None = None, **context: Any) -> dict[str, Any]:
        if entity is None:
            return {
                "name": "",
                "insee_code": "",
                "website": "",
                "picture_url": "",
                "wheelchair": False,
                "three_d": False,
            }
        return {
            "name": entity.name,
            "insee_code": entity.insee_code,
            "website": entity.website,
            "picture_url": entity.picture_url or "",
            "wheelchair": entity.wheelchair,
            "three_d": entity.three_d,
        }

    @classmethod
    def layout(cls, values: Mapping[str, Any], **lists: Any) -> list[Field]:
        return [
            Field("name", "Nom"),
            Field("insee_code", "Code INSEE"),
            Field("website", "Site web", kind="url"),
            Field("picture_url", "URL de l'image", kind="url"),
            Field("wheelchair", "Accès PMR", kind="checkbox"),
            Field("three_d", "Projection 3D", kind="checkbox"),
        ]
