"""GitHub transport for the commit history provider."""
