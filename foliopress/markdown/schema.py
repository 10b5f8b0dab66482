# foliopress/markdown/schema.py
"""
Attribute schemas for the custom tags.

Each storage tag name maps to a TagSchema that names the renderer it lowers
to and declares which attributes it accepts. Attributes are always strings in
the storage syntax; the schema only says which ones must be present.
"""

from dataclasses import dataclass, field
from typing import Mapping

from .exceptions import TagValidationError


@dataclass(frozen=True)
class AttributeSpec:
    name: str
    required: bool = False
    value_type: type = str


@dataclass(frozen=True)
class TagSchema:
    """
    Declaration of one custom tag.

    Args:
        name: Storage/editor tag name ("youtube").
        render: Renderer the tag lowers to ("YouTube").
        attributes: Accepted attributes.
        multiline: Write one attribute per line in storage format.
        component: Component name used by the legacy JSX storage format.
        preview_label: Text shown for the tag in the editor preview.
        preview_detail: Attribute appended to the preview label.
    """

    name: str
    render: str
    attributes: tuple[AttributeSpec, ...] = ()
    multiline: bool = False
    component: str | None = None
    preview_label: str = ""
    preview_detail: str | None = None

    def validate(self, attributes: Mapping[str, object]) -> dict[str, str]:
        """
        Check attributes against the schema and return the declared ones.

        Raises:
            TagValidationError: on a missing required attribute or a value of
                the wrong type.
        """
        validated: dict[str, str] = {}
        for spec in self.attributes:
            if spec.name not in attributes:
                if spec.required:
                    raise TagValidationError(
                        self.name, f"missing required attribute '{spec.name}'"
                    )
                continue
            value = attributes[spec.name]
            if not isinstance(value, spec.value_type):
                raise TagValidationError(
                    self.name,
                    f"attribute '{spec.name}' must be {spec.value_type.__name__}, "
                    f"got {type(value).__name__}",
                )
            validated[spec.name] = value
        return validated

    def undeclared(self, attributes: Mapping[str, object]) -> list[str]:
        declared = {spec.name for spec in self.attributes}
        return [name for name in attributes if name not in declared]


@dataclass
class TagRegistry:
    """Lookup of tag schemas by storage name or legacy component name."""

    schemas: dict[str, TagSchema] = field(default_factory=dict)

    def register(self, schema: TagSchema) -> TagSchema:
        self.schemas[schema.name] = schema
        return schema

    def get(self, name: str) -> TagSchema | None:
        return self.schemas.get(name)

    def by_component(self, component: str) -> TagSchema | None:
        for schema in self.schemas.values():
            if schema.component == component:
                return schema
        return None

    def __contains__(self, name: object) -> bool:
        return name in self.schemas

    def __iter__(self):
        return iter(self.schemas.values())


YOUTUBE = TagSchema(
    name="youtube",
    render="YouTube",
    attributes=(AttributeSpec("id", required=True),),
    component="YouTube",
    preview_label="▶ YouTube",
    preview_detail="id",
)

FOLIUM_TABLE = TagSchema(
    name="folium-table",
    render="FoliumTable",
    attributes=(
        AttributeSpec("columns", required=True),
        AttributeSpec("rows", required=True),
        AttributeSpec("columnHeadColors"),
        AttributeSpec("columnHeadColorsDark"),
        AttributeSpec("rowColors"),
        AttributeSpec("rowColorsDark"),
    ),
    multiline=True,
    component="FoliumTable",
    preview_label="📋 Folium Table",
)


def default_registry() -> TagRegistry:
    registry = TagRegistry()
    registry.register(YOUTUBE)
    registry.register(FOLIUM_TABLE)
    return registry


DEFAULT_REGISTRY = default_registry()
