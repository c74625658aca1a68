"""Turn-based creature battle game backend"""
__version__ = "0.1.0"
