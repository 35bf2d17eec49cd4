"""Load demo users and clothing items into the catalog."""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import suppress
from decimal import Decimal

from wardrobo.db import database, models, schemas
from wardrobo.db.repositories import clothing_items as repo_items
from wardrobo.db.repositories import users as repo_users


logger = logging.getLogger("wardrobo.scripts.seed_catalog")


# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()


DEMO_USERS = [
    {"email": "alex@example.com", "name": "Alex Rivera"},
    {"email": "jordan@example.com", "name": "Jordan Kim"},
]

DEMO_ITEMS = [
    {
        "name": "Indigo Relaxed Tee",
        "category": "TOP",
        "description": "Soft organic cotton tee with a relaxed fit and crew neckline.",
        "price": Decimal("32.00"),
        "primary_color": "blue",
        "colors": ["blue", "white"],
        "sizes": ["S", "M", "L"],
        "materials": ["organic cotton"],
        "brand": "Everyday Supply",
        "fit_notes": "Runs slightly oversized; size down for a slimmer silhouette.",
        "image_url": "/images/indigo-tee.jpg",
        "owner_email": "alex@example.com",
        "images": [
            {"url": "/images/indigo-tee.jpg", "alt_text": "Indigo relaxed tee on hanger", "is_primary": True},
        ],
    },
    {
        "name": "Cropped Linen Shirt",
        "category": "TOP",
        "description": "Breathable linen button-up with cropped hem and sleeve tabs.",
        "price": Decimal("54.50"),
        "primary_color": "white",
        "colors": ["white", "sand"],
        "sizes": ["XS", "S", "M"],
        "materials": ["linen"],
        "brand": "Seabreeze",
        "fit_notes": "True to size; pair with high-waisted bottoms.",
        "image_url": "/images/linen-shirt.jpg",
        "owner_email": "alex@example.com",
        "images": [
            {"url": "/images/linen-shirt.jpg", "alt_text": "White cropped linen shirt on mannequin", "is_primary": True},
        ],
    },
    {
        "name": "Coastal Chinos",
        "category": "BOTTOM",
        "description": "Lightweight stretch chinos with tapered leg and clean finish.",
        "price": Decimal("68.00"),
        "primary_color": "khaki",
        "colors": ["khaki", "navy"],
        "sizes": ["M", "L", "XL"],
        "materials": ["cotton", "elastane"],
        "brand": "Harborline",
        "fit_notes": "Slim through the thigh with slight taper below the knee.",
        "image_url": "/images/coastal-chinos.jpg",
        "owner_email": "jordan@example.com",
        "images": [
            {"url": "/images/coastal-chinos.jpg", "alt_text": "Khaki chinos folded on table", "is_primary": True},
        ],
    },
    {
        "name": "Skyline Tech Jacket",
        "category": "OUTERWEAR",
        "description": "Water-resistant shell with breathable mesh lining and hood.",
        "price": Decimal("120.00"),
        "primary_color": "gray",
        "colors": ["gray", "black"],
        "sizes": ["S", "M", "L", "XL"],
        "materials": ["polyester", "nylon"],
        "brand": "North Grid",
        "fit_notes": "Athletic fit; designed to layer over light sweaters.",
        "image_url": "/images/skyline-tech-jacket.jpg",
        "owner_email": "jordan@example.com",
        "images": [
            {"url": "/images/skyline-tech-jacket.jpg", "alt_text": "Gray technical jacket on model", "is_primary": True},
        ],
    },
]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the catalog with demo users and items")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete every existing clothing item before seeding",
    )
    return parser.parse_args(argv)


def seed(session, reset: bool = False) -> int:
    """Insert demo rows that are missing. Returns the number of items created."""
    if reset:
        removed = repo_items.delete_clothing_items(session)
        logger.info("Removed %d existing clothing items", removed)

    owner_ids = {}
    for user in DEMO_USERS:
        db_user = repo_users.get_or_create_user(session, email=user["email"], name=user["name"])
        owner_ids[db_user.email] = db_user.id

    created = 0
    for entry in DEMO_ITEMS:
        exists = (
            session.query(models.ClothingItem.id)
            .filter(models.ClothingItem.name == entry["name"])
            .first()
        )
        if exists:
            continue
        fields = {k: v for k, v in entry.items() if k != "owner_email"}
        item = schemas.ClothingItemCreate(owner_id=owner_ids.get(entry["owner_email"]), **fields)
        repo_items.create_clothing_item(session, item)
        created += 1
    return created


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    session = SessionLocal()
    try:
        created = seed(session, reset=args.reset)
    except Exception:
        logger.exception("Seed failed")
        print("Seed failed; see log output for details.", file=sys.stderr)
        return 1
    finally:
        with suppress(Exception):
            session.close()
    print(f"Seed complete: {created} clothing items created.")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
