"""techbadges - SVG badge grids for your tech stack."""

__version__ = "2.0.0"
