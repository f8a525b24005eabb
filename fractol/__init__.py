"""Mandelbrot and Julia set explorer with curve plotting, XPM reading and an in-memory pixel display."""

__version__ = "0.1.0"