"""draview: node capacity and Dynamic Resource Allocation device report."""

__version__ = "0.1.0"
