"""Module discovery and registration for Litestar applications."""
