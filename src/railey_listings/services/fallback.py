"""Built-in sample listings served when live extraction yields nothing."""

from __future__ import annotations

from typing import Tuple

from railey_listings.models import RawListing

from .enrich import CABIN_IMAGE, LAKE_IMAGE, MOUNTAIN_IMAGE, SKI_IMAGE, UNSPLASH_URL

# Modelled on the Deep Creek Lake, MD market.
SAMPLE_LISTINGS: Tuple[RawListing, ...] = (
    RawListing(
        mls_number="SAMPLE001",
        title="Lakefront Mountain Retreat",
        address="123 Deep Creek Lake Dr, McHenry, MD 21541",
        price=525_000,
        bedrooms=3,
        bathrooms="2.5",
        sqft=2100,
        image_url=LAKE_IMAGE,
        description=(
            "Stunning lakefront property with private dock access and panoramic mountain views. "
            "Perfect for year-round living or vacation rental."
        ),
        features=["Lakefront", "Private Dock", "Mountain Views", "Fireplace"],
        listing_url="https://www.railey.com/listings/SAMPLE001",
        days_on_market=15,
    ),
    RawListing(
        mls_number="SAMPLE002",
        title="Ski-In/Ski-Out Condo",
        address="456 Wisp Resort Rd, McHenry, MD 21541",
        price=285_000,
        bedrooms=2,
        bathrooms="2",
        sqft=1200,
        image_url=SKI_IMAGE,
        description=(
            "Modern condo with direct ski slope access at Wisp Resort. "
            "Fully furnished and ready for mountain adventures."
        ),
        features=["Ski Access", "Resort Amenities", "Furnished", "Mountain Views"],
        listing_url="https://www.railey.com/listings/SAMPLE002",
        days_on_market=8,
    ),
    RawListing(
        mls_number="SAMPLE003",
        title="Mountain View Family Home",
        address="789 Garrett Heights Way, Oakland, MD 21550",
        price=375_000,
        bedrooms=4,
        bathrooms="3",
        sqft=2800,
        image_url=MOUNTAIN_IMAGE,
        description=(
            "Spacious family home with breathtaking mountain views and large yard. "
            "Great for full-time residence in beautiful Garrett County."
        ),
        features=["Mountain Views", "Large Yard", "Family Friendly", "Updated Kitchen"],
        listing_url="https://www.railey.com/listings/SAMPLE003",
        days_on_market=22,
    ),
    RawListing(
        mls_number="SAMPLE004",
        title="Lake Access Cabin",
        address="321 Lakeshore Trail, Swanton, MD 21561",
        price=195_000,
        bedrooms=2,
        bathrooms="1",
        sqft=1000,
        image_url=CABIN_IMAGE,
        description=(
            "Cozy cabin with lake access and hiking trails nearby. "
            "Perfect weekend getaway in the heart of nature."
        ),
        features=["Lake Access", "Hiking Trails", "Cozy Cabin", "Natural Setting"],
        listing_url="https://www.railey.com/listings/SAMPLE004",
        days_on_market=5,
    ),
    RawListing(
        mls_number="SAMPLE005",
        title="Luxury Mountain Estate",
        address="654 Summit Ridge Dr, Terra Alta, WV 26764",
        price=750_000,
        bedrooms=5,
        bathrooms="4.5",
        sqft=4200,
        image_url=UNSPLASH_URL.format("photo-1512917774080-9991f1c4c750"),
        description=(
            "Impressive luxury estate with premium finishes, multiple fireplaces, "
            "and expansive mountain views from every room."
        ),
        features=["Luxury Estate", "Premium Finishes", "Multiple Fireplaces", "Panoramic Views"],
        listing_url="https://www.railey.com/listings/SAMPLE005",
        days_on_market=45,
    ),
)


def get_fallback() -> Tuple[RawListing, ...]:
    return SAMPLE_LISTINGS
