"""Dutch emission zone (ZE/LEZ) data pipeline"""

__version__ = "0.1.0"
