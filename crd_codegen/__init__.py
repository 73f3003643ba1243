"""Generate typed model classes from Kubernetes CustomResourceDefinitions."""

__version__ = "0.1.0"
