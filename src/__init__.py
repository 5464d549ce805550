"""
Work & Travel Season Projector - Source Package

A cash-flow projection for seasonal work-abroad participants
(e.g. J-1 Work & Travel): program dates, wages, living costs and tax
settings in; weekly, monthly and season-end profit out.

DESIGN PRINCIPLES:
1. The projection is a pure function of the form
2. Half-typed input never breaks the page (blank or malformed reads as zero)
3. Problems are reported next to the numbers, never silently fixed
4. Every form action is auditable
"""

__version__ = "1.0.0"
__author__ = "Season Projector Team"
