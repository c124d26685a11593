"""
habittrack - on-device habit tracking: check-in store and derived statistics
"""
__version__ = "0.1.0"
