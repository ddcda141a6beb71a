"""
IRB participating-facility report.

Builds the monthly <TR> fragment listing of facilities that participate in
the study group and have review-board approval, and files it in Google Drive.
"""

__version__ = "1.0.0"
