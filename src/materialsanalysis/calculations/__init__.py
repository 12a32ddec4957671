"""
Closed-form engineering calculators. All functions are pure; numeric
problems are returned as ``Err`` results rather than raised.
"""
