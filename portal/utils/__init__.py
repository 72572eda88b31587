"""Request-level helpers: sanitization, throttling and the admin gate."""
