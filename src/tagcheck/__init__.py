"""tagcheck - detect duplicate serialization tags in compiled JVM classes."""

__version__ = "0.1.0"
