"""
dimstep - brightness stepping for backlight and LED devices
"""

__version__ = "0.1.0"
