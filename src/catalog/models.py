"""
Chemical catalog record.

A catalog entry describes one cleaning product. Records travel as JSON
dictionaries with camelCase keys; the dataclass exposes them as snake_case
attributes.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

NOT_SPECIFIED = "Not specified"


def _as_text(value: Any) -> Optional[str]:
    """
    Coerce a raw catalog value to text.

    Lists (e.g. a YAML `usedFor: [oven, grill]`) are joined with commas;
    other non-string scalars are stringified. None stays None.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(str(part) for part in value if part is not None)
    return str(value)


@dataclass(frozen=True)
class Chemical:
    """
    A cleaning chemical in the user-maintained catalog.

    Attributes:
        id: Unique identifier
        name: Product or brand name
        active_ingredient: Primary active ingredient (free text)
        used_for: Comma-separated keywords for surfaces/equipment
        application: Application instructions
        toxicological_info: Toxicological summary (optional)
        personal_protection: Required PPE summary (optional)
        color: Display color, '#RRGGBB' (not used for matching)
        image: Base64 encoded image (not used for matching)
    """
    id: str
    name: str
    active_ingredient: str = NOT_SPECIFIED
    used_for: str = ""
    application: str = ""
    toxicological_info: Optional[str] = None
    personal_protection: Optional[str] = None
    color: Optional[str] = None
    image: Optional[str] = None

    @property
    def keywords(self) -> FrozenSet[str]:
        """Trimmed, lowercased, non-empty ``used_for`` keywords."""
        if not self.used_for or not isinstance(self.used_for, str):
            return frozenset()
        return frozenset(
            keyword.strip()
            for keyword in self.used_for.lower().split(',')
            if keyword.strip()
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chemical":
        """
        Build a Chemical from a catalog dictionary.

        Accepts the camelCase keys used by catalog files and falls back to
        snake_case keys. Non-string text values are coerced with _as_text.

        Raises:
            KeyError: If 'id' or 'name' is missing
        """
        def pick(camel: str, snake: str, default=None):
            if camel in data:
                return data[camel]
            return data.get(snake, default)

        return cls(
            id=str(data['id']),
            name=_as_text(data['name']),
            active_ingredient=_as_text(pick('activeIngredient', 'active_ingredient', NOT_SPECIFIED)),
            used_for=_as_text(pick('usedFor', 'used_for', '')) or '',
            application=_as_text(data.get('application')) or '',
            toxicological_info=_as_text(pick('toxicologicalInfo', 'toxicological_info')),
            personal_protection=_as_text(pick('personalProtection', 'personal_protection')),
            color=_as_text(data.get('color')),
            image=_as_text(data.get('image')),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dictionary for JSON serialization."""
        result = {
            "id": self.id,
            "name": self.name,
            "activeIngredient": self.active_ingredient,
            "usedFor": self.used_for,
            "application": self.application,
            "toxicologicalInfo": self.toxicological_info,
            "personalProtection": self.personal_protection,
        }
        if self.color is not None:
            result["color"] = self.color
        if self.image is not None:
            result["image"] = self.image
        return result


def find_chemical(chemicals, chemical_id: Optional[str]) -> Optional[Chemical]:
    """
    Look up a chemical by id.

    Args:
        chemicals: Iterable of Chemical records
        chemical_id: Identifier to find (None returns None)

    Returns:
        Matching Chemical, or None if not in the catalog
    """
    if chemical_id is None:
        return None
    for chemical in chemicals:
        if chemical.id == chemical_id:
            return chemical
    return None
