"""
Volume Landmarks and Recovery Windows

Weekly per-muscle set landmarks (Renaissance Periodization style):

    MV  = Maintenance Volume (keep gains)
    MEV = Minimum Effective Volume (start growing)
    MAV = Maximum Adaptive Volume (optimal growth zone, low..high)
    MRV = Maximum Recoverable Volume (overreaching above this)

and per-muscle recovery thresholds in hours.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


@dataclass(frozen=True)
class VolumeLandmarks:
    """Weekly set-count landmarks for one muscle."""
    mv: int
    mev: int
    mav_low: int
    mav_high: int
    mrv: int


@dataclass(frozen=True)
class RecoveryWindow:
    """Recovery thresholds for one muscle (hours since last trained)."""
    fatigued: int
    fresh_min: int
    fresh_max: int
    undertrained: int


class VolumeZone(Enum):
    """Where a weekly set count sits relative to the landmarks."""
    BELOW_MV = "below_mv"
    MV_MEV = "mv_mev"
    MEV_MAV = "mev_mav"
    MAV_MRV = "mav_mrv"
    ABOVE_MRV = "above_mrv"


VOLUME_LANDMARKS: Dict[str, VolumeLandmarks] = {
    'chest':      VolumeLandmarks(mv=8, mev=10, mav_low=12, mav_high=20, mrv=22),
    'upper back': VolumeLandmarks(mv=4, mev=5, mav_low=6, mav_high=10, mrv=12),
    'lats':       VolumeLandmarks(mv=6, mev=8, mav_low=10, mav_high=16, mrv=20),
    'lower back': VolumeLandmarks(mv=2, mev=3, mav_low=4, mav_high=8, mrv=10),
    'shoulders':  VolumeLandmarks(mv=6, mev=8, mav_low=16, mav_high=22, mrv=26),
    'biceps':     VolumeLandmarks(mv=4, mev=6, mav_low=10, mav_high=14, mrv=20),
    'triceps':    VolumeLandmarks(mv=4, mev=6, mav_low=10, mav_high=14, mrv=18),
    'forearms':   VolumeLandmarks(mv=2, mev=4, mav_low=6, mav_high=10, mrv=14),
    'quads':      VolumeLandmarks(mv=6, mev=8, mav_low=12, mav_high=18, mrv=20),
    'hamstrings': VolumeLandmarks(mv=4, mev=6, mav_low=10, mav_high=16, mrv=20),
    'glutes':     VolumeLandmarks(mv=0, mev=0, mav_low=4, mav_high=12, mrv=16),
    'calves':     VolumeLandmarks(mv=4, mev=6, mav_low=8, mav_high=16, mrv=20),
    'abs':        VolumeLandmarks(mv=0, mev=0, mav_low=8, mav_high=16, mrv=20),
    'obliques':   VolumeLandmarks(mv=0, mev=0, mav_low=4, mav_high=10, mrv=14),
}


# Small muscles: 24-48h, medium: 48-72h, large: 72-96h
RECOVERY_HOURS: Dict[str, RecoveryWindow] = {
    'forearms':   RecoveryWindow(fatigued=24, fresh_min=24, fresh_max=72, undertrained=120),
    'abs':        RecoveryWindow(fatigued=24, fresh_min=24, fresh_max=72, undertrained=120),
    'obliques':   RecoveryWindow(fatigued=24, fresh_min=24, fresh_max=72, undertrained=120),
    'calves':     RecoveryWindow(fatigued=24, fresh_min=24, fresh_max=72, undertrained=120),
    'biceps':     RecoveryWindow(fatigued=36, fresh_min=36, fresh_max=84, undertrained=144),
    'triceps':    RecoveryWindow(fatigued=36, fresh_min=36, fresh_max=84, undertrained=144),
    'shoulders':  RecoveryWindow(fatigued=48, fresh_min=48, fresh_max=96, undertrained=168),
    'chest':      RecoveryWindow(fatigued=48, fresh_min=48, fresh_max=96, undertrained=168),
    'upper back': RecoveryWindow(fatigued=48, fresh_min=48, fresh_max=96, undertrained=168),
    'lats':       RecoveryWindow(fatigued=72, fresh_min=72, fresh_max=120, undertrained=192),
    'lower back': RecoveryWindow(fatigued=72, fresh_min=72, fresh_max=120, undertrained=192),
    'quads':      RecoveryWindow(fatigued=72, fresh_min=72, fresh_max=120, undertrained=192),
    'hamstrings': RecoveryWindow(fatigued=72, fresh_min=72, fresh_max=120, undertrained=192),
    'glutes':     RecoveryWindow(fatigued=72, fresh_min=72, fresh_max=120, undertrained=192),
}


def volume_zone(current_sets: int, landmarks: VolumeLandmarks) -> VolumeZone:
    """Classify a weekly set count against a muscle's landmarks."""
    if current_sets < landmarks.mv:
        return VolumeZone.BELOW_MV
    if current_sets < landmarks.mev:
        return VolumeZone.MV_MEV
    if current_sets <= landmarks.mav_high:
        return VolumeZone.MEV_MAV
    if current_sets <= landmarks.mrv:
        return VolumeZone.MAV_MRV
    return VolumeZone.ABOVE_MRV
