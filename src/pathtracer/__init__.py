"""Offline Monte-Carlo path tracer for scenes of analytic spheres."""

__version__ = "0.1.0"
