"""
Listing Repository - In-Memory Storage for Property Listings

Provides storage, search and pagination for listings.
This is an in-memory implementation with optional JSON file persistence.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from core.listings.filters import SORT_NEWEST, SearchFilters, filter_listings, sort_listings
from core.listings.schema import Listing

logger = logging.getLogger(__name__)


# =============================================================================
# Page
# =============================================================================


@dataclass(frozen=True)
class ListingPage:
    """One page of search results."""

    listings: tuple[Listing, ...]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(self.total / self.limit)

    def to_dict(self) -> dict:
        return {
            "listings": [listing.to_dict() for listing in self.listings],
            "pagination": {
                "total": self.total,
                "page": self.page,
                "limit": self.limit,
                "total_pages": self.total_pages,
            },
        }


# =============================================================================
# Repository
# =============================================================================


class ListingRepository:
    """
    Repository for storing and searching listings.

    Uses in-memory storage with optional file persistence.
    """

    def __init__(self, persist_path: Optional[str] = None):
        """
        Initialise repository.

        Args:
            persist_path: Optional path to persist data to JSON file
        """
        self._listings: dict[str, Listing] = {}
        self._persist_path = Path(persist_path) if persist_path else None

        if self._persist_path and self._persist_path.exists():
            self._load_from_file()

    def _save_to_file(self) -> None:
        """Persist data to file."""
        if not self._persist_path:
            return

        data = {
            "listings": {
                lid: listing.to_dict()
                for lid, listing in self._listings.items()
            },
            "saved_at": datetime.utcnow().isoformat(),
        }

        self._persist_path.parent.mkdir(parents=True, exist_ok=True)
        self._persist_path.write_text(json.dumps(data, indent=2))

    def _load_from_file(self) -> None:
        """Load data from file."""
        try:
            data = json.loads(self._persist_path.read_text())
            for lid, listing_data in data.get("listings", {}).items():
                self._listings[lid] = Listing.from_dict(listing_data)
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            logger.warning("Could not load listings from %s: %s", self._persist_path, e)
            return
        logger.info("Loaded %d listings from %s", len(self._listings), self._persist_path)

    # =========================================================================
    # CRUD Operations
    # =========================================================================

    def create(self, listing: Listing) -> Listing:
        """
        Store a new listing.

        Raises:
            ValueError: If the listing ID already exists
        """
        if listing.listing_id in self._listings:
            raise ValueError(f"Listing {listing.listing_id} already exists")

        self._listings[listing.listing_id] = listing
        self._save_to_file()
        logger.info("Created listing %s for %s", listing.listing_id, listing.owner_id)
        return listing

    def get(self, listing_id: str) -> Optional[Listing]:
        """Get a listing by ID, or None."""
        return self._listings.get(listing_id)

    def update(self, listing: Listing) -> Listing:
        """
        Replace a stored listing.

        Raises:
            KeyError: If the listing does not exist
        """
        if listing.listing_id not in self._listings:
            raise KeyError(f"Listing {listing.listing_id} not found")

        self._listings[listing.listing_id] = listing
        self._save_to_file()
        logger.info("Updated listing %s", listing.listing_id)
        return listing

    def delete(self, listing_id: str) -> bool:
        """Delete a listing. Returns False if it did not exist."""
        if self._listings.pop(listing_id, None) is None:
            return False
        self._save_to_file()
        logger.info("Deleted listing %s", listing_id)
        return True

    # =========================================================================
    # Queries
    # =========================================================================

    def search(
        self,
        filters: Optional[SearchFilters] = None,
        page: int = 1,
        limit: int = 10,
        order: str = SORT_NEWEST,
    ) -> ListingPage:
        """
        Search listings with filters and pagination.

        Args:
            filters: Search filters (all listings if None)
            page: 1-based page number
            limit: Page size

        Raises:
            ValueError: If page or limit is not positive, or order is unknown
        """
        if page < 1:
            raise ValueError("page must be >= 1")
        if limit < 1:
            raise ValueError("limit must be >= 1")

        matched = filter_listings(self._listings.values(), filters or SearchFilters())
        ordered = sort_listings(matched, order)
        start = (page - 1) * limit
        return ListingPage(
            listings=tuple(ordered[start:start + limit]),
            total=len(ordered),
            page=page,
            limit=limit,
        )

    def list_by_owner(self, owner_id: str) -> list[Listing]:
        """All listings owned by a user, newest first."""
        owned = [l for l in self._listings.values() if l.owner_id == owner_id]
        return sort_listings(owned, SORT_NEWEST)

    def count(self) -> int:
        """Total number of listings."""
        return len(self._listings)


# =============================================================================
# Singleton Instance
# =============================================================================

_repository_instance: Optional[ListingRepository] = None


def get_listing_repository(persist_path: Optional[str] = None) -> ListingRepository:
    """
    Get the listing repository singleton.

    Args:
        persist_path: Optional path for persistence (only used on first call)
    """
    global _repository_instance
    if _repository_instance is None:
        _repository_instance = ListingRepository(persist_path)
    return _repository_instance


def reset_listing_repository(repository: Optional[ListingRepository] = None) -> None:
    """Replace the singleton (used by tests)."""
    global _repository_instance
    _repository_instance = repository
