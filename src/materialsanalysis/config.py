"""
Configuration & Constants
=========================
Central registry for resource paths and the numeric constants shared by the
calculators.

Exports:
    ASSETS_PATH (str): Absolute path to the packaged assets directory.
    DEFAULT_MATS_PATH (str): Absolute path to the default materials file.
"""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to a resource shipped inside the package.
    """
    package_root: Path = Path(__file__).parent
    return os.path.join(str(package_root), relative_path)


ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_MATS_PATH: str = os.path.join(ASSETS_PATH, "materials_default.json")

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")

# Linear solver
PIVOT_TOLERANCE: float = 1e-10

# Physical constants
AVOGADRO: float = 6.022e23  # 1/mol
GAS_CONSTANT: float = 8.314  # J/(mol·K)

# Larson-Miller correlation (rough, uncalibrated)
LMP_CONSTANT: float = 20.0
LMP_INTERCEPT: float = 22000.0
LMP_STRESS_SLOPE: float = 20.0

# X-ray diffraction
CU_K_ALPHA: float = 1.5406  # Å

# Number of intervals used when sampling curves for plotting
CURVE_SAMPLES: int = 50
