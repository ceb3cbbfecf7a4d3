# standings/normalization/names.py
from typing import Dict, Optional, Protocol, Sequence

from loguru import logger


class NameResolver(Protocol):
    """Picks the candidate that refers to the same team as `name`."""

    def resolve(self, name: str, candidates: Sequence[str]) -> Optional[str]: ...


class ContainmentResolver:
    """Matches when either lower-cased name contains the other.

    Candidates are tried in order and the first hit wins, so "Celtics",
    "celtics" and "Boston Celtics" all resolve to "boston celtics". An empty
    name never matches anything.
    """

    def resolve(self, name: str, candidates: Sequence[str]) -> Optional[str]:
        needle = (name or "").strip().lower()
        if not needle:
            return None
        for candidate in candidates:
            hay = (candidate or "").lower()
            if hay and (needle in hay or hay in needle):
                return candidate
        return None


class AliasResolver:
    """Expands nicknames / abbreviations before delegating to another resolver."""

    def __init__(
        self,
        aliases: Dict[str, str],
        fallback: Optional[NameResolver] = None,
    ):
        # Key: lowercased raw name, Value: desired canonical name
        self.aliases = {k.lower(): v for k, v in aliases.items()}
        self.fallback = fallback or ContainmentResolver()
        logger.debug(f"AliasResolver initialized with {len(self.aliases)} aliases.")

    def resolve(self, name: str, candidates: Sequence[str]) -> Optional[str]:
        canonical = self.aliases.get((name or "").strip().lower())
        if canonical:
            hit = self.fallback.resolve(canonical, candidates)
            if hit is not None:
                return hit
        return self.fallback.resolve(name, candidates)


DEFAULT_RESOLVER: NameResolver = ContainmentResolver()
