"""
New City flavor monitor package.

This package contains modules for scraping the New City Microcreamery menu,
diffing it against the last cached run, rendering the change report and
posting it to Discord.  See README.md for details.
"""

__all__ = [
    "config",
    "diff",
    "main",
    "models",
    "notifier",
    "report",
    "scraper",
    "store",
    "utils",
]
