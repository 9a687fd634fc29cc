"""
VCTCareer - Valorant esports career simulator client.

The onboarding flow itself lives in the `onboarding` package; this package
holds configuration and the command-line entry point.
"""

__version__ = "0.1.0"
