"""Brain — prompt building, model calls and response parsing."""
