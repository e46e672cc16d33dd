"""
Briki insurance marketplace core.

This package provides the plan comparison engine behind the Briki
marketplace (travel, auto, pet and health insurance):
- Filtering, sorting and recommendation scoring over plan catalogs
- Keyword-based context extraction for the chat assistant
- RUNT (Colombian vehicle registry) lookups
"""

__version__ = "1.0.0"
