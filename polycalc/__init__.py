"""Exact arithmetic on sparse multivariate integer polynomials, driven by a
stack-based calculator."""
