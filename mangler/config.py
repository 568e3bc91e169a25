"""Configuration classes for mangler components."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FanOutConfig:
    """Limits on the static fan-out of a mutation set."""

    # Log a warning when one input word may branch into more outputs than this
    warn_threshold: int = 10_000

    # Refuse to run a set that may exceed this many outputs per word (None: no limit)
    max_fan_out: Optional[int] = None

    def exceeds_limit(self, bound: int) -> bool:
        """Return True when ``bound`` is above the hard limit."""
        return self.max_fan_out is not None and bound > self.max_fan_out

    def exceeds_warning(self, bound: int) -> bool:
        """Return True when ``bound`` is above the warning threshold."""
        return bound > self.warn_threshold


@dataclass
class ScrapeConfig:
    """Settings for fetching seed pages."""

    # Seconds to wait for connect and read
    timeout: float = 30.0

    user_agent: str = "mangler/0.1 (+wordlist generator)"


# Global configuration instances
FANOUT_CONFIG = FanOutConfig()
SCRAPE_CONFIG = ScrapeConfig()
