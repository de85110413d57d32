"""Application-level settings and wiring."""
