"""Configuration package (paths, settings and the TOML-backed Config)."""
