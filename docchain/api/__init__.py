"""DocChain HTTP API."""
