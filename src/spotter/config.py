"""
Engine Configuration

Thresholds and calendar settings for the estimation and check-in engine.
Defaults reproduce the coaching rules in use; the YAML file only makes
them explicit.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from datetime import tzinfo
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dateutil import tz
from dotenv import load_dotenv


# =============================================================================
# Configuration
# =============================================================================

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / 'config' / 'spotter.yaml'


def load_config_yaml(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from YAML file, return empty dict if not found."""
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return {}


@dataclass(frozen=True)
class SpotterConfig:
    """Configuration for load estimation and check-in alerting.

    Loads from config/spotter.yaml if available, else uses defaults.
    """

    # Load estimation
    rep_penalty_pct: float = 2.5  # %1RM lost per rep beyond the first
    min_percentage: float = 50.0  # Floor for the rep-adjusted percentage
    default_percentage: float = 85.0  # RPE 7 row, used on table misses
    min_rpe: float = 6.0
    max_rpe: float = 10.0

    # Missing check-in alert
    missing_checkin_weekday: int = 4  # Friday (Monday = 0)

    # Pain report alert
    pain_window_days: int = 14

    # Low score alert
    low_scores_window_days: int = 21
    low_scores_min_checkins: int = 2
    low_score_threshold: float = 5.0
    low_scores_min_metrics: int = 2

    # IANA name of the coaching timezone; None = host local time
    timezone: Optional[str] = None

    def local_tz(self) -> tzinfo:
        """Timezone that defines the 'local' calendar day.

        Configured name first, then SPOTTER_TIMEZONE, then host local time.
        """
        name = self.timezone or os.getenv('SPOTTER_TIMEZONE')
        if name:
            zone = tz.gettz(name)
            if zone is None:
                raise ValueError(f"Unknown timezone: {name}")
            return zone
        return tz.tzlocal()

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None) -> 'SpotterConfig':
        """Load config from YAML file, then apply environment overrides."""
        load_dotenv()

        if path is None and os.getenv('SPOTTER_CONFIG'):
            path = Path(os.environ['SPOTTER_CONFIG'])
        yaml_config = load_config_yaml(path)

        kwargs = {}
        known = {f.name for f in fields(cls)}

        # Sections are cosmetic; keys are flat field names
        for section in ('estimator', 'checkins'):
            for key, value in (yaml_config.get(section) or {}).items():
                if key in known:
                    kwargs[key] = value

        if 'timezone' in yaml_config:
            kwargs['timezone'] = yaml_config['timezone']

        env_tz = os.getenv('SPOTTER_TIMEZONE')
        if env_tz:
            kwargs['timezone'] = env_tz

        return cls(**kwargs)


DEFAULT_CONFIG = SpotterConfig()
