"""
Profile README Generator

Builds a GitHub profile README from live repository and star data
fetched from the GitHub REST API.
"""

__version__ = "1.0.0"
__author__ = "Profile README Team"
