"""Derived listing fields: feature tags, display title, blurb and placeholder image."""

from __future__ import annotations

from typing import Iterable, List, Optional

UNSPLASH_URL = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=300"

LAKE_IMAGE = UNSPLASH_URL.format("photo-1564013799919-ab600027ffc6")
SKI_IMAGE = UNSPLASH_URL.format("photo-1545324418-cc1a3fa10c00")
MOUNTAIN_IMAGE = UNSPLASH_URL.format("photo-1570129477492-45c003edd2be")
CABIN_IMAGE = UNSPLASH_URL.format("photo-1518780664697-55e3ad937233")

DEFAULT_FEATURES = ["mountain-living", "natural-setting", "four-season-location"]


def extract_features(address: str, sqft: Optional[int], price: int) -> List[str]:
    """Tag a listing from its address tokens, size and price."""
    addr = (address or "").lower()
    sqft = sqft or 0
    features: List[str] = []
    if "deep creek" in addr or "lake" in addr:
        features += ["lake-access", "mountain-views"]
    if "wisp" in addr or "ski" in addr:
        features += ["ski-access", "resort-area"]
    if "garrett" in addr:
        features += ["garrett-county", "mountain-location"]
    if sqft > 2500:
        features += ["spacious-living", "large-floor-plan"]
    if sqft > 3500:
        features.append("luxury-home")
    if price > 500_000:
        features += ["premium-property", "high-end-finishes"]
    if price > 750_000:
        features.append("luxury-estate")
    return features or list(DEFAULT_FEATURES)


def merge_features(*groups: Iterable[str]) -> List[str]:
    """Concatenate tag lists keeping the first occurrence of each tag."""
    seen: set[str] = set()
    out: List[str] = []
    for group in groups:
        for tag in group:
            key = tag.strip().lower()
            if key and key not in seen:
                seen.add(key)
                out.append(tag.strip())
    return out


def street_of(address: str) -> str:
    return (address or "").split(",")[0].strip()


def generate_title(address: str, features: Iterable[str]) -> str:
    tags = {f.lower() for f in features}
    street = street_of(address)
    if "lake-access" in tags:
        return f"Lake Access Home – {street}"
    if "ski-access" in tags:
        return f"Ski Resort Property – {street}"
    if "luxury-estate" in tags:
        return f"Luxury Mountain Estate – {street}"
    return f"Mountain Home – {street}"


def generate_description(address: str, features: List[str], price: int) -> str:
    location = "Maryland mountain" if "MD" in (address or "") else "scenic"
    if price > 500_000:
        tier = "luxury"
    elif price > 300_000:
        tier = "premium"
    else:
        tier = "comfortable"
    offers = ", ".join(f.lower() for f in features[:3])
    return (
        f"Beautiful {tier} home in the {location} area of Garrett County. "
        f"This property offers {offers} and is perfect for year-round living "
        "or as a vacation retreat in Deep Creek Lake area."
    )


def placeholder_image(features: Iterable[str]) -> str:
    """Pick a stock photo matching the listing's category."""
    tags = [f.lower() for f in features]
    if any("lake" in t for t in tags):
        return LAKE_IMAGE
    if any("ski" in t for t in tags):
        return SKI_IMAGE
    if any("mountain" in t for t in tags):
        return MOUNTAIN_IMAGE
    return CABIN_IMAGE
