"""Networked missile and target engagement simulator with launcher, launch-control and radar programs."""

__version__ = "0.1.0"