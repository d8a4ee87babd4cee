"""
socialcharts: boxplot, grouped bar and line charts of social-media engagement.

Each chart runs as a two-phase pipeline: load a CSV into a typed Dataset,
then build a renderer-agnostic ChartSpec of draw primitives that the
matplotlib renderer paints.
"""

__version__ = "0.1.0"
