"""
satdownload: resumable downloader for College Board score report files.
"""

__version__ = "1.0.0"
