"""YouTube Strategy AI - find outlier videos and mine their comments for ideas."""

__version__ = "0.1.0"
