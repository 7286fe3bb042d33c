"""credlify - scaffold a gulp/webpack build pipeline into an npm package."""

__version__ = "0.1.0"
