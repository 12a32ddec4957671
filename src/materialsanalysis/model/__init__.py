"""
The MODEL layer contains data structures and lookup tables: the formula
registry, the material library with its selection ranking, and the failure
analysis questionnaire.
"""
