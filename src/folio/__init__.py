"""folio - static blog and portfolio site builder."""

__version__ = "0.1.0"
