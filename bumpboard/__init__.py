"""
BumpBoard - Minimal ephemeral discussion boards

Named boards hold a bounded number of threads, threads hold a bounded
number of replies, and content rolls off by bump order and inactivity.
"""

__version__ = "0.1.0"
__author__ = "BumpBoard Project"
