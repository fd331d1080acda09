"""
Constrained SMACOF: multidimensional scaling with polynomial constraints.
"""
__version__ = "0.1.0"
