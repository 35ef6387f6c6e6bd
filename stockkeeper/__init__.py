"""Local-first inventory tracker: the product store and its data model."""

__version__ = "0.1.0"
