"""Certificate verification and intake API."""
