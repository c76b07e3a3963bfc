"""
Engine Configuration

Tunable constants for program generation and schedule reconciliation.

Loads from config/mesoplan.yaml if available, else uses defaults.
Environment (or a .env file) may point at another file via MESOPLAN_CONFIG.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "mesoplan.yaml"


def load_config_yaml(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from YAML file, return empty dict if not found."""
    load_dotenv()

    if config_path is None:
        env_path = os.getenv("MESOPLAN_CONFIG")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return {}


@dataclass(frozen=True)
class MesoplanConfig:
    """Configuration for the periodization and reconciliation engines."""

    # Volume
    priority_bonus_sets: int = 2
    limitation_cap_sets: int = 2  # mv + this, never above mavLow

    # Weight progression (fraction per training week)
    compound_weekly_rate: float = 0.025
    isolation_weekly_rate: float = 0.01

    # Floors
    min_rest_seconds: int = 15

    # Merge feasibility
    merge_max_session_sets: int = 28
    merge_mrv_headroom: int = 4
    merged_set_cap: int = 2

    # Option windows (days)
    do_missed_max_days: int = 4
    merge_recommend_max_days: int = 3
    reschedule_window_days: int = 5
    long_break_days: int = 7

    # Severity thresholds
    urgent_missed_count: int = 3
    urgent_days: int = 10
    warning_missed_count: int = 2
    warning_days: int = 5

    log_level: str = "WARNING"

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> 'MesoplanConfig':
        """Load config from YAML file."""
        yaml_config = load_config_yaml(config_path)

        kwargs = {}

        if 'volume' in yaml_config:
            v = yaml_config['volume']
            kwargs['priority_bonus_sets'] = v.get('priority_bonus_sets', 2)
            kwargs['limitation_cap_sets'] = v.get('limitation_cap_sets', 2)

        if 'progression' in yaml_config:
            p = yaml_config['progression']
            kwargs['compound_weekly_rate'] = p.get('compound_weekly_rate', 0.025)
            kwargs['isolation_weekly_rate'] = p.get('isolation_weekly_rate', 0.01)
            kwargs['min_rest_seconds'] = p.get('min_rest_seconds', 15)

        if 'merge' in yaml_config:
            m = yaml_config['merge']
            kwargs['merge_max_session_sets'] = m.get('max_session_sets', 28)
            kwargs['merge_mrv_headroom'] = m.get('mrv_headroom', 4)
            kwargs['merged_set_cap'] = m.get('merged_set_cap', 2)

        if 'resolution' in yaml_config:
            r = yaml_config['resolution']
            kwargs['do_missed_max_days'] = r.get('do_missed_max_days', 4)
            kwargs['merge_recommend_max_days'] = r.get('merge_recommend_max_days', 3)
            kwargs['reschedule_window_days'] = r.get('reschedule_window_days', 5)
            kwargs['long_break_days'] = r.get('long_break_days', 7)

        if 'severity' in yaml_config:
            s = yaml_config['severity']
            kwargs['urgent_missed_count'] = s.get('urgent_missed_count', 3)
            kwargs['urgent_days'] = s.get('urgent_days', 10)
            kwargs['warning_missed_count'] = s.get('warning_missed_count', 2)
            kwargs['warning_days'] = s.get('warning_days', 5)

        kwargs['log_level'] = os.getenv(
            "MESOPLAN_LOG_LEVEL",
            yaml_config.get('log_level', "WARNING"),
        )

        return cls(**kwargs)
