"""Typed errors raised at the engine's boundaries."""


class NezaError(Exception):
    """Base exception for the matching and auction engine"""

    pass


class MalformedProfileError(NezaError):
    """User profile data is malformed (NaN, negative or out-of-range values)"""

    pass


class CatalogIntegrityError(NezaError):
    """Catalog or feed entry is malformed or self-contradictory"""

    pass


class AuctionTickError(NezaError):
    """Advancing the auction failed; the previous snapshot stays published"""

    pass


class OfferNotFoundError(NezaError):
    """No offer with the requested id exists in the snapshot"""

    pass
