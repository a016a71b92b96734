"""Request helpers: identity, permissions, flash messages and forms."""
