"""
Core domain layer.

Houses the analysis queue pipeline and the domain exception hierarchy.
"""
