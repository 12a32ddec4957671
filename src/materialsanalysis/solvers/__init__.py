"""
Dense Linear Solver
===================
Small dense systems solved by Gaussian elimination with partial pivoting.

Note: This module should be pure Python/NumPy and should not depend on the
calculators that use it.
"""
