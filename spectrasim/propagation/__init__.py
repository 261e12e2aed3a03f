from .analogue import (
    MATERIAL_ATTENUATION,
    AnalogueModel,
    ConstantGain,
    FreeSpacePathLoss,
    LogDistancePathLoss,
    ObstacleShadowing,
)
from .interference import dbm_to_mw, linear_to_db, mw_to_dbm, noise_power_dbm, thermal_noise_mw

__all__ = [
    "MATERIAL_ATTENUATION", "AnalogueModel", "ConstantGain", "FreeSpacePathLoss",
    "LogDistancePathLoss", "ObstacleShadowing",
    "dbm_to_mw", "linear_to_db", "mw_to_dbm", "noise_power_dbm", "thermal_noise_mw",
]
