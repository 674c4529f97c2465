"""Job board client: async resource state, API client and orchestrated actions."""

__version__ = "1.0.0"
