"""Admin authentication: session tokens and route guards."""
