"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the MCTS agent:
the search budget, the UCT exploration constant, and optional limits on
wall-clock time and playout length.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from turnbot_ai.core.errors import ConfigurationError


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    This class defines all tunable parameters for the MCTS algorithm,
    with validation and sensible defaults.
    """
    # Search parameters
    iterations: int = 500
    """Number of MCTS iterations to perform per move decision"""

    exploration_weight: float = 1.41
    """UCT exploration constant (approximately sqrt(2))"""

    time_limit: Optional[float] = None
    """Optional time limit in seconds, checked between iterations (None = no limit)"""

    max_playout_depth: Optional[int] = None
    """Optional cap on playout length; capped playouts count as no result"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations <= 0:
            raise ConfigurationError("iterations must be positive")

        if self.exploration_weight < 0:
            raise ConfigurationError("exploration_weight must be non-negative")

        if self.time_limit is not None and self.time_limit <= 0:
            raise ConfigurationError("time_limit must be positive or None")

        if self.max_playout_depth is not None and self.max_playout_depth <= 0:
            raise ConfigurationError("max_playout_depth must be positive or None")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer iterations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(iterations=100)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(iterations=5000)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
