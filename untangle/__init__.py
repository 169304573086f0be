"""Node-based HTTP API test orchestrations: model, run and store in SQLite."""

__version__ = "0.1.0"