from .chart import render_profile

__all__ = ["render_profile"]
