"""Digital wallet service: entities, use cases, SQL storage, events and HTTP views."""

__version__ = "0.1.0"