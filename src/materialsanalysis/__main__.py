"""Command-line demonstration: logs a short report for the default inputs."""
import logging
import sys

from materialsanalysis.analysis.regression import InterpolationMethod, Point2D, interpolate
from materialsanalysis.analysis.statistics import describe, parse_sample
from materialsanalysis.logging_config import setup_logging
from materialsanalysis.model.materials import MaterialLibrary, MaterialProperty, SelectionCriteria

logger = logging.getLogger("materialsanalysis.main")

DEFAULT_SAMPLE = "450, 460, 445, 455, 470, 440, 465, 452, 458, 448, 520"
DEFAULT_POINTS = [Point2D(10, 100), Point2D(20, 150), Point2D(30, 180), Point2D(40, 190)]


def main() -> int:
    setup_logging(level=logging.INFO)

    summary = describe(parse_sample(DEFAULT_SAMPLE))
    logger.info(
        f"Sample n={summary.n}: mean={summary.mean:.2f}, median={summary.median:.2f}, "
        f"σ={summary.std_dev:.2f}, CoV={summary.cov:.2f} %, Weibull m={summary.weibull_shape:.2f}"
    )
    if summary.outliers:
        logger.info(f"Outliers (> 2σ): {', '.join(f'{v:g}' for v in summary.outliers)}")

    fitted = interpolate(DEFAULT_POINTS, InterpolationMethod.POLY2, query_x=25.0)
    if fitted.ok:
        result = fitted.value
        coefficients = ", ".join(f"{c:.4g}" for c in result.coefficients)
        logger.info(
            f"Quadratic fit [{coefficients}]: R²={result.r_squared:.4f}, RMSE={result.rmse:.3f}, "
            f"y(25)={result.query_y:.2f}"
        )
    else:
        logger.warning(f"Interpolation failed: {fitted.message}")

    library = MaterialLibrary()
    for material, score in library.rank(SelectionCriteria(min_yield=300, max_density=5))[:3]:
        details = ", ".join(
            material.format_property(p) for p in (MaterialProperty.YIELD_STRENGTH, MaterialProperty.DENSITY)
        )
        logger.info(f"Candidate {material.name}: {score} % match ({details})")

    return 0


if __name__ == "__main__":
    sys.exit(main())
