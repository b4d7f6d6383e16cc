"""linebasic HTTP API package."""
