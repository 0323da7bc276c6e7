"""
PageSpeed Proxy - proxies PageSpeed Insights and grades the result.
"""

__version__ = "1.0.0"
