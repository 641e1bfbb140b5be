"""
Power BI access tool: manage users and their reporting group access
"""

__version__ = "1.0.0"
