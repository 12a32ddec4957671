"""
Data analysis helpers: polynomial regression and descriptive statistics.
"""
