"""Field normalization shared by list and detail shaping."""

from typing import Dict, List, Optional

DEFAULT_PLACEHOLDER_IMAGE = "/placeholder.png"


def display_name(raw_name: str) -> str:
    """Replace the first hyphen with a space.

    Only the first one: "soul-heart-boost" becomes "soul heart-boost".
    """
    return raw_name.replace("-", " ", 1)


def resolve_image_url(sprites: Optional[Dict], placeholder: str = DEFAULT_PLACEHOLDER_IMAGE) -> str:
    """
    Pick the best available artwork URL for a record.

    Order: official artwork, home render, default sprite, placeholder.
    """
    sprites = sprites or {}
    other = sprites.get("other") or {}
    candidates = [
        (other.get("official-artwork") or {}).get("front_default"),
        (other.get("home") or {}).get("front_default"),
        sprites.get("front_default"),
    ]
    for url in candidates:
        if url:
            return url
    return placeholder


def slot_ordered_types(record: Dict) -> List[str]:
    """Type names ordered by upstream slot."""
    types = sorted(record.get("types") or [], key=lambda t: t.get("slot", 0))
    return [t["type"]["name"] for t in types]


def id_from_resource_url(url: str) -> Optional[int]:
    """Last non-empty path segment as an int, or None if it isn't one."""
    parts = [part for part in (url or "").split("/") if part]
    if not parts:
        return None
    try:
        return int(parts[-1])
    except ValueError:
        return None
