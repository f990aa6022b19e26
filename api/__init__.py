"""HTTP API for Market News Triage."""
