from typing import Any, Dict

# Kumu element field <- Murmurations profile field
_FIELD_MAP = (
    ("description", "description"),
    ("id", "id"),
    ("image", "image"),
    ("label", "name"),
    ("location", "full_address"),
    ("mission", "mission"),
    ("url", "primary_url"),
)

ELEMENT_TYPE = "organization"


def profile_to_kumu_element(profile: Dict[str, Any]) -> Dict[str, Any]:
    """Reshape a Murmurations organization profile into a Kumu element.

    Fields missing from the profile are left out of the element.
    """
    element = {dst: profile[src] for dst, src in _FIELD_MAP if src in profile}
    element["type"] = ELEMENT_TYPE
    return element
