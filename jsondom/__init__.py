"""A JSON document object model with typed nodes, pointer lookup, in-place editing and visitors."""

__version__ = "0.1.0"
__all__ = ["document", "jsontype", "value", "visitor"]