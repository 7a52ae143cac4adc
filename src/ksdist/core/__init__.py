"""
Core domain models, mathematical primitives, and contracts.

This module contains the numerical kernel of the Kolmogorov-Smirnov
distribution; it has no I/O and no process-wide state.
"""
