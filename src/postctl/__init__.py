"""postctl — front-matter aware tooling for a static-site blog content corpus."""

__version__ = "0.1.0"
