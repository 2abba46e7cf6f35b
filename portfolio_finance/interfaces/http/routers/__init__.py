"""HTTP routers for the finance admin API."""
