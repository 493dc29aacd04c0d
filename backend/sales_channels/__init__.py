"""
Sales channels backend: sales channel entity, product assignment and admin API
"""
__version__ = "1.0.0"
