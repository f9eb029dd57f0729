"""staffboard — seating-chart board control CLI."""

__version__ = "0.3.0"
