"""
Materials engineering calculators: property formulas, fatigue, creep,
fracture, hardness and crystallography, plus the regression and statistics
helpers used by the analysis tools.
"""
